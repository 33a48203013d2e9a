"""Language configurations for Tree-sitter fact extraction."""

from dataclasses import dataclass
from pathlib import Path

import tree_sitter_javascript as tsjs
import tree_sitter_python as tspython
import tree_sitter_typescript as tsts
from tree_sitter import Language


@dataclass
class LanguageConfig:
    """Configuration for a parseable programming language."""

    name: str
    tag: str  # Language tag stored on FileFacts
    extensions: tuple[str, ...]
    language: Language
    # Tree-sitter query patterns for extracting facts
    import_query: str
    function_query: str
    class_query: str
    export_query: str


# Tree-sitter query patterns for Python
PYTHON_IMPORT_QUERY = """
(import_statement
  name: (dotted_name) @import.name
)

(import_statement
  name: (aliased_import
    name: (dotted_name) @import.name
  )
)

(import_from_statement
  module_name: (dotted_name) @import.module
)

(import_from_statement
  module_name: (relative_import) @import.module
)
"""

PYTHON_FUNCTION_QUERY = """
(function_definition
  name: (identifier) @function.name
)
"""

PYTHON_CLASS_QUERY = """
(class_definition
  name: (identifier) @class.name
)
"""

# Module-level definitions are the module's public surface
PYTHON_EXPORT_QUERY = """
(module
  (function_definition
    name: (identifier) @export.name
  )
)

(module
  (class_definition
    name: (identifier) @export.name
  )
)

(module
  (decorated_definition
    definition: (function_definition
      name: (identifier) @export.name
    )
  )
)

(module
  (decorated_definition
    definition: (class_definition
      name: (identifier) @export.name
    )
  )
)
"""

# Shared by JavaScript and TypeScript (the TypeScript grammar extends JavaScript)
JS_IMPORT_QUERY = """
; ES6 import: import x from 'module'
(import_statement
  source: (string) @import.source
)

; Re-export: export { x } from 'module'
(export_statement
  source: (string) @import.source
)

; CommonJS require: require('module')
(call_expression
  function: (identifier) @require.function
  arguments: (arguments
    .
    (string) @import.require
  )
)
"""

JS_FUNCTION_QUERY = """
(function_declaration
  name: (identifier) @function.name
)

(generator_function_declaration
  name: (identifier) @function.name
)
"""

JS_CLASS_QUERY = """
(class_declaration
  name: (_) @class.name
)
"""

JS_EXPORT_QUERY = """
(export_statement
  declaration: (function_declaration
    name: (identifier) @export.name
  )
)

(export_statement
  declaration: (generator_function_declaration
    name: (identifier) @export.name
  )
)

(export_statement
  declaration: (class_declaration
    name: (_) @export.name
  )
)

(export_statement
  declaration: (lexical_declaration
    (variable_declarator
      name: (identifier) @export.name
    )
  )
)

(export_statement
  declaration: (variable_declaration
    (variable_declarator
      name: (identifier) @export.name
    )
  )
)
"""

TS_CLASS_QUERY = JS_CLASS_QUERY + """
(abstract_class_declaration
  name: (_) @class.name
)
"""

TS_EXPORT_QUERY = JS_EXPORT_QUERY + """
(export_statement
  declaration: (abstract_class_declaration
    name: (_) @export.name
  )
)

(export_statement
  declaration: (interface_declaration
    name: (_) @export.name
  )
)

(export_statement
  declaration: (type_alias_declaration
    name: (_) @export.name
  )
)
"""


def _create_language_configs() -> dict[str, LanguageConfig]:
    """Create language configurations with Tree-sitter languages."""
    return {
        "python": LanguageConfig(
            name="python",
            tag="python",
            extensions=(".py",),
            language=Language(tspython.language()),
            import_query=PYTHON_IMPORT_QUERY,
            function_query=PYTHON_FUNCTION_QUERY,
            class_query=PYTHON_CLASS_QUERY,
            export_query=PYTHON_EXPORT_QUERY,
        ),
        "javascript": LanguageConfig(
            name="javascript",
            tag="javascript",
            extensions=(".js", ".jsx", ".mjs", ".cjs"),
            language=Language(tsjs.language()),
            import_query=JS_IMPORT_QUERY,
            function_query=JS_FUNCTION_QUERY,
            class_query=JS_CLASS_QUERY,
            export_query=JS_EXPORT_QUERY,
        ),
        "typescript": LanguageConfig(
            name="typescript",
            tag="typescript",
            extensions=(".ts", ".mts", ".cts"),
            language=Language(tsts.language_typescript()),
            import_query=JS_IMPORT_QUERY,
            function_query=JS_FUNCTION_QUERY,
            class_query=TS_CLASS_QUERY,
            export_query=TS_EXPORT_QUERY,
        ),
        "tsx": LanguageConfig(
            name="tsx",
            tag="typescript",
            extensions=(".tsx",),
            language=Language(tsts.language_tsx()),
            import_query=JS_IMPORT_QUERY,
            function_query=JS_FUNCTION_QUERY,
            class_query=TS_CLASS_QUERY,
            export_query=TS_EXPORT_QUERY,
        ),
    }


# Singleton instance of language configs
LANGUAGE_CONFIGS = _create_language_configs()

# Map file extensions to language config names
EXTENSION_TO_LANGUAGE: dict[str, str] = {}
for lang_name, config in LANGUAGE_CONFIGS.items():
    for ext in config.extensions:
        EXTENSION_TO_LANGUAGE[ext] = lang_name

# Tags for files that are inventoried but not parsed
NON_CODE_TAGS: dict[str, str] = {
    ".json": "json",
    ".md": "markdown",
    ".txt": "markdown",
}

DEFAULT_TAG = "text"


def get_language_for_file(file_path: Path | str) -> str | None:
    """Get the language config name for a file based on its extension.

    Args:
        file_path: Path to the file

    Returns:
        Language config name or None if not parseable
    """
    ext = Path(file_path).suffix.lower()
    return EXTENSION_TO_LANGUAGE.get(ext)


def get_language_config(language: str) -> LanguageConfig | None:
    """Get the language configuration for a language.

    Args:
        language: Language config name

    Returns:
        LanguageConfig or None if not supported
    """
    return LANGUAGE_CONFIGS.get(language)


def get_language_tag(file_path: Path | str) -> str:
    """Get the language tag recorded for any file, parseable or not.

    Args:
        file_path: Path to the file

    Returns:
        Tag such as "python", "typescript", "json", "markdown" or "text"
    """
    language = get_language_for_file(file_path)
    if language:
        return LANGUAGE_CONFIGS[language].tag
    return NON_CODE_TAGS.get(Path(file_path).suffix.lower(), DEFAULT_TAG)



# Directories to ignore when scanning for files
IGNORED_DIRECTORIES = frozenset({
    # === Version Control ===
    ".git",
    ".svn",
    ".hg",

    # === JavaScript / Node ===
    "node_modules",
    "bower_components",
    ".next",
    ".nuxt",
    ".turbo",
    ".parcel-cache",
    "coverage",

    # === Python ===
    "__pycache__",
    ".venv",
    "venv",
    "env",
    ".tox",
    ".nox",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    "site-packages",
    ".eggs",

    # === IDEs ===
    ".idea",
    ".vscode",

    # === Build Outputs ===
    "dist",
    "build",
    "out",
})

# Extensions never worth reading as text
BINARY_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".bmp", ".webp",
    ".pdf", ".exe", ".bin", ".dll", ".so", ".dylib",
    ".pyc", ".pyo", ".class", ".o", ".a",
    ".zip", ".gz", ".tar", ".tgz", ".jar", ".whl",
    ".woff", ".woff2", ".ttf", ".eot",
    ".mp3", ".mp4", ".mov", ".wav",
})


def should_ignore_path(path: Path) -> bool:
    """Check if a path should be ignored during scanning.

    Args:
        path: Path to check (relative to the project root)

    Returns:
        True if the path should be ignored
    """
    for part in path.parts:
        if part in IGNORED_DIRECTORIES:
            return True
        # Hidden files and directories (also covers .env files)
        if part.startswith(".") and part not in {".", "..", ".github", ".gitlab"}:
            return True
    return False


def is_text_file(file_path: Path | str) -> bool:
    """Heuristic check that a file is text rather than binary."""
    return Path(file_path).suffix.lower() not in BINARY_EXTENSIONS
