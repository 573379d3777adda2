"""체인지로그 파이프라인 상수

키워드 규칙 표는 우선순위 순서로 평가되며 첫 번째로 일치하는 규칙이 채택된다.
"""

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

FALLBACK_MARKER = "GENERATION_FALLBACK"

FALLBACK_ENTRIES = (
    "- Improved overall stability and reliability across the app",
    "- Refined the interface for a smoother everyday experience",
    "- Fixed several small issues reported by users",
)

BULLET_MARKERS = ("- ", "* ", "• ", "-", "*", "•")

QUOTE_CHARS = "\"'`“”‘’"

TRUNCATION_MARKER = "... [truncated {count} chars]"
OMITTED_FILES_MARKER = "[{count} more file diffs omitted to fit the prompt budget]"

# (컴포넌트 라벨, 경로 조건) - 파일 경로(소문자) 기준
FILE_COMPONENT_RULES: tuple[tuple[str, tuple[str, ...], tuple[str, ...], tuple[str, ...]], ...] = (
    # label, prefixes, substrings, suffixes
    # 디렉터리 규칙이 테스트 규칙보다 먼저, 확장자 규칙은 테스트 규칙 뒤에 둔다
    ("api", ("api/", "src/api/", "src/app/api/", "app/api/"), ("/api/",), ()),
    ("ui", ("components/", "src/components/", "src/app/components/"), ("/components/",), ()),
    ("database", ("db/", "src/db/", "src/app/db/", "migrations/", "drizzle/"), ("/db/", "/migrations/"), ()),
    ("tests", ("tests/", "test/"), ("test", "spec"), ()),
    ("ui", (), (), (".tsx", ".jsx", ".vue", ".svelte")),
    ("database", (), (), (".sql",)),
    ("styles", (), (), (".css", ".scss", ".sass", ".less")),
    ("types", ("types/",), ("/types/", "types."), (".d.ts",)),
    ("documentation", ("docs/",), ("/docs/",), (".md", ".rst")),
)

FILE_COMPONENT_DEFAULT = "other"

# 항목 컴포넌트 분류 (우선순위 순)
COMPONENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Authentication", ("login", "logout", "log in", "sign in", "sign-in", "signup", "sign up", "auth", "password", "session", "account")),
    ("Security Features", ("security", "secure", "vulnerab", "encrypt", "permission", "2fa", "privacy")),
    ("Search", ("search", "filter", "lookup", "find")),
    ("Performance", ("performance", "faster", "speed", "optimiz", "latency", "load time", "cache", "caching")),
    ("Notifications", ("notification", "alert", "email", "reminder")),
    ("User Interface", ("interface", "layout", "design", "theme", "dark mode", "button", "display", "visual", "ui", "page", "preview", "editor")),
    ("Integrations", ("integration", "webhook", "api", "github", "import", "export", "sync")),
    ("Data Management", ("database", "data", "storage", "backup", "migration", "record")),
    ("Documentation", ("documentation", "docs", "readme", "guide", "tutorial")),
)

# 항목 스코프 분류 (frontend → backend → database → infrastructure 순)
SCOPE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Frontend", ("interface", "layout", "design", "theme", "dark mode", "button", "display", "visual", "ui", "page", "preview", "editor", "screen")),
    ("Backend", ("api", "server", "endpoint", "service", "processing", "webhook", "auth", "login")),
    ("Database", ("database", "schema", "migration", "storage", "query", "record")),
    ("Infrastructure", ("deploy", "deployment", "infrastructure", "build", "pipeline", "docker", "hosting", "ci", "config")),
)

IMPACT_MAJOR_KEYWORDS = ("breaking", "major", "redesign", "overhaul", "launch", "introduc", "brand new", "removed")
IMPACT_PATCH_KEYWORDS = ("fix", "bug", "typo", "patch", "resolve", "correct", "minor issue", "crash")

TECHNICAL_KEYWORDS = (
    "api",
    "endpoint",
    "schema",
    "refactor",
    "dependency",
    "dependencies",
    "database",
    "migration",
    "config",
    "interface implementation",
    "component",
    "function",
    "library",
    "sdk",
)
