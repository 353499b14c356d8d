"""Common literal values used across sorg.

These constants keep tag names, filenames, and template names centralized so
the tree builder, renderer, and tests import the same values without drifting.

Examples
--------
>>> from sorg import _constants
>>> _constants.FEED_FILENAME
'rss.xml'
>>> "PROGRESS" in _constants.DEFAULT_TODO_KEYWORDS
True
"""

POST_TAG = "post"
POSTS_TAG = "posts"
NOEXPORT_TAG = "noexport"

INDEX_SLUG = "index"

DEFAULT_TODO_KEYWORDS = ("TODO", "PROGRESS", "WAITING", "MAYBE", "CANCELLED")
DEFAULT_DONE_KEYWORDS = ("DONE", "READ")
IN_REVIEW_KEYWORD = "PROGRESS"

DEFAULT_DOCUMENT = "blog.org"
DEFAULT_STATIC_FOLDER = "static"
DEFAULT_BUILD_FOLDER = "build"
DEFAULT_TEMPLATES_FOLDER = "templates"
DEFAULT_HIGHLIGHT_STYLE = "monokai"

PAGE_FILENAME = "index.html"
FEED_FILENAME = "rss.xml"
DEFAULT_TEMPLATE = "default.html"
DEFAULT_INDEX_TEMPLATE = "default_index.html"
MACRO_TEMPLATE = "macros/{name}.html"

WORDS_PER_MINUTE = 180

RELOAD_HOST = "127.0.0.1"
RELOAD_PORT = 2794
RELOAD_PROTOCOL = "sorg"
HOT_RELOAD_SNIPPET = (
    "<script>(() => { const socket = new WebSocket("
    f"'ws://localhost:{RELOAD_PORT}', '{RELOAD_PROTOCOL}'); "
    "socket.addEventListener('message', () => {location.reload();}); })();"
    "</script>"
)
