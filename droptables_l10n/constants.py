"""Constants shared by the matching core and the site builder."""

# elements whose text runs may be localized
ALLOWED_TAGS = frozenset({"th", "td", "a", "h3", "b"})
# elements that never carry content nor a closing tag
VOID_TAGS = frozenset({"br", "meta", "link", "img", "input", "hr"})

MIN_PATTERN_LENGTH = 2
MAX_PATTERN_LENGTH = 80
FORBIDDEN_PATTERN_CHARS = frozenset({"\r", "\n"})
ROMAN_NUMERALS = frozenset(
    {"I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X"}
)

SOURCE_LANGUAGE = "en"
DEFAULT_LANGUAGE = "zh"
DEFAULT_URL = "https://www.warframe.com/droptables"
DEFAULT_OUTPUT_DIR = "site"

SOURCE_PAGE = "droptables-en.html"
DATA_DIR = "warframe-public-export-plus"
LANGUAGES_CSV = "supplementals/languages.csv"
PAGE_TEMPLATE = "droptables-{code}.html"
DICT_TEMPLATE = "dict.{code}.json"
