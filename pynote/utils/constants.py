APP_ORG = "QuickTools"
APP_NAME = "PyNotepad#"

DEFAULT_FILE_NAME = "Untitled"
TAB_SIZE = 2

WELCOME_MESSAGE = """// Welcome to PyNotepad#
// Start typing your code here...
//
// Ctrl+3..6 insert a C#, C++, Python or Java template.
// Alt+N opens the runner.
"""

FILE_FILTERS = (
    "All Files (*)",
    "C# Files (*.cs)",
    "C++ Files (*.cpp *.c *.h)",
    "Python Files (*.py)",
    "Java Files (*.java)",
    "JavaScript Files (*.js)",
    "Text Files (*.txt *.md)",
)

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_RECENTS = "file/recent"
SETTINGS_THEME = "editor/theme"
SETTINGS_TEMPLATES = "editor/custom_templates"
MAX_RECENTS = 8
