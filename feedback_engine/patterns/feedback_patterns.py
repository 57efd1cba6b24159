"""
Feedback classification rules for survey comment triage.
Rule tables for the SQL tooling extension NPS survey.

Category rules are scored (weight x matched tests). Area and user type rules
are priority ordered: the first rule with a matching test wins. The rule with
an empty test list in each set is its catch-all.
"""

from ..categorisation.pattern_matching import Rule, near, pattern, word
from ..config.classifier_config import CLASSIFIER_CONFIG

_WINDOW = CLASSIFIER_CONFIG["proximity_window"]


# Category Rules (scored)
CATEGORY_RULES = (
    Rule(
        name="SSMS/ADS Comparison",
        weight=4,
        tests=(
            word("ssms"),
            pattern(r"\bsql server management studio\b"),
            pattern(r"\bazure data studio\b"),
            # "ads" collides with adverts; accept it only near its expansion, or as exact ADS
            near("ads", ("azure", "data", "studio"), window=_WINDOW, exact_form="ADS"),
            word("management studio"),
            word("notebook"),
            word("profiler"),
            pattern(r"\bsql server profiler\b"),
            pattern(r"\bactivity monitor\b"),
            word("toad"),
            pattern(r"\bdb(?:-)?visualizer\b"),
            pattern(r"\bdbeaver\b"),
            # Execute shortcut, usually raised in comparisons
            word("f5"),
        ),
    ),
    Rule(
        name="Missing Feature",
        weight=3,
        tests=(
            word("missing"),
            pattern(r"\bmissing (feature|features)\b"),
            pattern(r"\bwould like\b"),
            word("wish"),
            pattern(r"\badd(ing)?\b"),
            word("feature"),
            pattern(r"\bbring back\b"),
            pattern(r"\bgive me back\b"),
            word("shortcut"),
            pattern(r"\bshort ?cut\b"),
            # Extension features people ask for by name
            word("export"),
            word("import"),
            pattern(r"\bresult(s)? grid\b"),
            pattern(r"\bschema compare\b"),
            pattern(r"\bschema designer?\b"),
            word("table designer"),
            pattern(r"\bobject explorer\b"),
        ),
    ),
    Rule(
        name="Connectivity",
        weight=3,
        tests=(
            word("connection"),
            word("connect"),
            word("authenticate"),
            word("reauthenticate"),
            pattern(r"\bre-authenticate\b"),
            word("credential"),
            word("login"),
            word("kinit"),
            word("kerberos"),
            word("timeout"),
            pattern(r"\btoken\b"),
            word("keychain"),
        ),
    ),
    Rule(
        name="Quality/Performance",
        weight=3,
        tests=(
            word("slow"),
            word("performance"),
            word("hangs"),
            word("crashes"),
            word("freezes"),
            word("unstable"),
            word("brittle"),
            word("reliability"),
            pattern(r"\btakes a while\b"),
            word("forever"),
            word("timeout"),
            word("stuck"),
            word("lag"),
            word("speed"),
            word("responsive"),
            # IntelliSense / autocomplete, including common misspellings
            word("autocomplete"),
            word("auto-complete"),
            pattern(r"\bauto complete\b"),
            word("intellisense"),
            pattern(r"\bintelisnese\b"),
            pattern(r"\bintel+isense\b"),
            word("loading"),
            pattern(r"\bload time\b"),
        ),
    ),
    Rule(
        name="UI/UX",
        weight=2,
        tests=(
            word("ui"),
            word("interface"),
            word("clunky"),
            pattern(r"\buser experience\b"),
            word("workflow"),
            word("usability"),
            word("clumsy"),
            word("intuitive"),
            word("cumbersome"),
            word("scrolling"),
            word("space"),
            word("layout"),
            word("design"),
            word("visual"),
            word("look"),
            word("display"),
            word("screen"),
            word("result"),
            word("table"),
            word("size"),
            word("view"),
            word("navigate"),
            word("navigation"),
            word("annoying"),
            pattern(r"\btoo (many|much) clicks?\b"),
        ),
    ),
    Rule(
        name="AI/Copilot",
        weight=2,
        tests=(
            word("copilot"),
            pattern(r"\bco-pilot\b"),
            pattern(r"\bai\b"),
        ),
    ),
    Rule(name="General Feedback", weight=1),
)


# Area Rules (priority order)
AREA_RULES = (
    Rule(
        name="Connectivity",
        tests=(
            word("connection"),
            word("connect"),
            word("authenticate"),
            word("login"),
            word("credential"),
            word("kerberos"),
            word("kinit"),
            word("token"),
            word("timeout"),
            word("keychain"),
        ),
    ),
    Rule(
        name="Query Results",
        tests=(
            word("result"),
            pattern(r"\bquery result(s)?\b"),
            word("grid"),
            word("export"),
            word("copy"),
            word("display"),
        ),
    ),
    Rule(
        name="Query Editor",
        tests=(
            word("query"),
            word("execute"),
            word("editor"),
            word("syntax"),
            word("intellisense"),
            pattern(r"\b(auto[- ]?)?complete\b"),
        ),
    ),
    Rule(
        name="GitHub Copilot",
        tests=(
            word("copilot"),
            pattern(r"\bco-pilot\b"),
            pattern(r"\bai\b"),
        ),
    ),
    Rule(name="Other"),
)


# User Type Rules (priority order)
USER_TYPE_RULES = (
    Rule(
        name="DBA",
        tests=(
            word("ssms"),
            pattern(r"\bmanagement studio\b"),
            word("dba"),
            pattern(r"\bdatabase admin\b"),
            word("jobs"),
            word("profiler"),
            pattern(r"\bactivity monitor\b"),
            pattern(r"\blinked server\b"),
            pattern(r"\bindex( management)?\b"),
            word("backup"),
            pattern(r"\bazure data studio\b"),
        ),
    ),
    Rule(
        name="Developer",
        tests=(
            word("development"),
            word("coding"),
            word("copilot"),
            word("github"),
            pattern(r"\bvs code\b"),
            word("extension"),
            word("workflow"),
            word("orm"),
            word("prisma"),
            word("tedious"),
        ),
    ),
    Rule(
        name="Data Analyst",
        tests=(
            word("analysis"),
            word("analytics"),
            word("report"),
            pattern(r"\bpower bi\b"),
            word("query"),
        ),
    ),
    Rule(name="General User"),
)


# Constructiveness patterns
# Non-constructive is checked first and wins over constructive
NON_CONSTRUCTIVE_PATTERNS = (
    pattern(r"\bjust copy\b"),
    pattern(r"\blike ssms\b"),
    pattern(r"\bbring back\b"),
    pattern(r"\bfar from\b"),
    pattern(r"\bnot as good\b"),
)

CONSTRUCTIVE_PATTERNS = (
    pattern(r"\bwould be\b"),
    word("suggestion"),
    word("improve"),
    word("add"),
    word("feature"),
    word("option"),
    word("ability"),
    word("support"),
    pattern(r"\bplease\b"),
    pattern(r"\bshould\b"),
    pattern(r"\bcould\b"),
)
