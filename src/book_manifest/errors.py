"""Exception types for book-manifest.

Problems with individual chapter files are reported as values (see
``book_manifest.models.issues``); these exceptions cover the cases where a
run cannot proceed at all.
"""


class BookManifestError(Exception):
    """Base exception for all book-manifest errors."""

    pass


class FrontMatterError(BookManifestError):
    """Front-matter block is missing, unterminated, or not a YAML mapping."""

    pass


class DiscoveryError(BookManifestError):
    """Manuscript root cannot be scanned."""

    pass
