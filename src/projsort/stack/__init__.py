from projsort.stack.manifest_parser import (
    PARSE_ERRORS,
    ManifestParseError,
    parse_gradle,
    parse_maven,
    parse_package_json,
    parse_pyproject,
)

__all__ = [
    "PARSE_ERRORS",
    "ManifestParseError",
    "parse_gradle",
    "parse_maven",
    "parse_package_json",
    "parse_pyproject",
]
