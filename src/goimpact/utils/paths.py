"""Path helpers for mapping repository files onto package identifiers."""

import posixpath


def directory_of(path: str) -> str:
    """
    Get the repository-relative directory containing a file.

    Args:
        path: Repository-relative POSIX path

    Returns:
        Directory path, or "" for files at the repository root
    """
    return posixpath.dirname(path.strip("/"))


def package_id(namespace: str, directory: str) -> str:
    """
    Build the import path of a first-party package.

    Args:
        namespace: Module namespace declared in the manifest
        directory: Repository-relative directory ("" for the root)

    Returns:
        The namespace alone for the root directory, otherwise namespace/directory
    """
    directory = directory.strip("/")
    if directory in ("", "."):
        return namespace
    return f"{namespace}/{directory}"
