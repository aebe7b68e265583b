import re

# Strict decimal number, the only numeric spelling the codecs accept
NUMBER_PATTERN = re.compile(r'^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$')

# Leading numeric prefix, used to decide when a YAML string needs quotes
NUMBER_PREFIX_PATTERN = re.compile(r'^\s*[-+]?(?:\d|\.\d)')

VALUE_PATTERNS = {
    'double_quoted': re.compile(r'^"(.*)"$', re.DOTALL),
    'single_quoted': re.compile(r"^'(.*)'$", re.DOTALL),
    'inline_array': re.compile(r'^\[.*\]$', re.DOTALL),
}

TOML_PATTERNS = {
    'section': re.compile(r'^\[([^\]]+)\]$'),
    'key_value': re.compile(r'^([^=]+)=(.*)$'),
}

YAML_PATTERNS = {
    'comment_line': re.compile(r'^(\s*)#\s*(.*)$'),
    'key_value': re.compile(r'^([^:#]+?):\s*(.*)$'),
    'inline_comment': re.compile(r'^(.+?)\s+#\s*(.*)$'),
    'list_item': re.compile(r'^-(?:\s+(.*)|\s*)$'),
    # list items need ': ' so that '- http://host' stays a plain string
    'item_key_value': re.compile(r'^([^:#]+?):(?:\s+(.*))?$'),
}

JSON_PATTERNS = {
    'comment_line': re.compile(r'^\s*//\s*(.*)$'),
    'quoted_key': re.compile(r'"([^"]+)"\s*:'),
    'strip_comment_lines': re.compile(r'^[ \t]*//.*$', re.MULTILINE),
}

PROPERTIES_COMMENT_MARKERS = ('#', '!')
