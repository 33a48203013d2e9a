"""Parser module for collecting per-file facts using Tree-sitter."""

from .facts import FileFacts, ProjectAnalysis
from .languages import (
    BINARY_EXTENSIONS,
    IGNORED_DIRECTORIES,
    LANGUAGE_CONFIGS,
    LanguageConfig,
    get_language_config,
    get_language_for_file,
    get_language_tag,
    is_text_file,
    should_ignore_path,
)
from .manifests import is_manifest, parse_manifest, parse_package_json, parse_requirements
from .treesitter import TreeSitterParser

__all__ = [
    # Facts
    "FileFacts",
    "ProjectAnalysis",
    # Languages
    "BINARY_EXTENSIONS",
    "IGNORED_DIRECTORIES",
    "LANGUAGE_CONFIGS",
    "LanguageConfig",
    "get_language_config",
    "get_language_for_file",
    "get_language_tag",
    "is_text_file",
    "should_ignore_path",
    # Manifests
    "is_manifest",
    "parse_manifest",
    "parse_package_json",
    "parse_requirements",
    # Parser
    "TreeSitterParser",
]
