"""Static prefix wordlist for brute-force candidate generation."""

_PREFIXES = (
    # Core services
    "www",
    "mail",
    "ftp",
    "localhost",
    "webmail",
    "smtp",
    "pop",
    "ns1",
    "ns2",
    "ns3",
    "ns4",
    "admin",
    "administrator",
    "blog",
    "dev",
    "development",
    "staging",
    "test",
    "testing",
    "api",
    "api-v1",
    "api-v2",
    "api-v3",
    "app",
    "apps",
    "mobile",
    "cdn",
    "static",
    "assets",
    "images",
    "img",
    "media",
    "video",
    "audio",
    "files",
    "download",
    "downloads",
    "upload",

    # Documentation & Support
    "docs",
    "documentation",
    "help",
    "support",
    "kb",
    "knowledge",
    "wiki",
    "faq",
    "guide",

    # Infrastructure
    "portal",
    "vpn",
    "remote",
    "gateway",
    "proxy",
    "cache",
    "edge",
    "node",
    "server",
    "git",
    "gitlab",
    "github",
    "bitbucket",
    "jenkins",
    "ci",
    "cd",
    "build",
    "deploy",
    "prod",
    "production",
    "beta",
    "alpha",
    "demo",
    "sandbox",
    "uat",
    "qa",
    "stage",
    "old",
    "new",
    "legacy",
    "backup",
    "bak",
    "temp",
    "tmp",
    "archive",
    "mirror",

    # E-commerce
    "shop",
    "store",
    "cart",
    "checkout",
    "pay",
    "payment",
    "payments",
    "billing",
    "invoice",
    "order",
    "orders",
    "catalog",
    "product",
    "products",
    "inventory",
    "merchant",

    # Security
    "secure",
    "ssl",
    "https",
    "login",
    "signin",
    "auth",
    "authentication",
    "sso",
    "oauth",
    "account",
    "accounts",
    "profile",
    "user",
    "users",
    "member",
    "members",
    "register",

    # Admin panels
    "panel",
    "cpanel",
    "whm",
    "plesk",
    "webmin",
    "phpmyadmin",
    "adminer",
    "mysql",
    "directadmin",
    "ispconfig",
    "hestia",
    "virtualmin",
    "webpanel",
    "dashboard",

    # Databases & Storage
    "db",
    "database",
    "sql",
    "mysql",
    "postgres",
    "postgresql",
    "mongo",
    "mongodb",
    "redis",
    "elastic",
    "elasticsearch",
    "solr",
    "s3",
    "bucket",
    "storage",
    "cloud",

    # Monitoring
    "grafana",
    "prometheus",
    "kibana",
    "logstash",
    "splunk",
    "datadog",
    "newrelic",
    "sentry",
    "status",
    "health",
    "monitor",
    "monitoring",
    "metrics",
    "analytics",
    "tracking",
    "events",
    "logs",
    "logging",
    "audit",
    "reports",
    "reporting",

    # Internal/Corporate
    "internal",
    "intranet",
    "extranet",
    "private",
    "corp",
    "corporate",
    "office",
    "hr",
    "finance",
    "sales",
    "marketing",
    "engineering",
    "legal",
    "it",
    "ops",
    "jira",
    "confluence",
    "slack",
    "teams",
    "zoom",
    "meet",
    "calendar",

    # Communication
    "ws",
    "websocket",
    "socket",
    "realtime",
    "push",
    "notifications",
    "notify",
    "email",
    "newsletter",
    "subscribe",
    "unsubscribe",
    "preferences",
    "settings",
    "forum",
    "community",
    "discuss",
    "chat",
    "message",
    "messaging",

    # Mobile/Apps
    "m",
    "mobile",
    "ios",
    "android",
    "app",
    "apps",
    "pwa",

    # CDN/Network
    "origin",
    "lb",
    "loadbalancer",
    "haproxy",
    "nginx",
    "apache",
    "web",
    "www2",
    "www3",
    "assets1",
    "assets2",
    "static1",
    "static2",
    "cdn1",
    "cdn2",
    "media1",
    "media2",

    # Development
    "dev1",
    "dev2",
    "test1",
    "test2",
    "staging1",
    "staging2",
    "preview",
    "canary",
    "feature",
    "experiment",
    "debug",
    "trace",
    "api-dev",
    "api-staging",
    "api-test",

    # Geographic
    "us",
    "eu",
    "asia",
    "uk",
    "de",
    "fr",
    "jp",
    "cn",
    "au",
    "ca",
    "br",
    "in",
    "us-east",
    "us-west",
    "eu-west",
    "eu-central",
    "ap-south",
    "ap-northeast",

    # Miscellaneous
    "console",
    "control",
    "manage",
    "management",
    "config",
    "configuration",
    "service",
    "services",
    "microservice",
    "lambda",
    "function",
    "functions",
    "rest",
    "graphql",
    "grpc",
    "rpc",
    "soap",
    "wsdl",
    "xml",
    "json",
)

# Order is irrelevant; repeats across groups collapse here.
COMMON_SUBDOMAINS: tuple[str, ...] = tuple(dict.fromkeys(_PREFIXES))
