"""
Exception hierarchy for MarkVault.

Fatal errors abort the whole build. Recoverable page errors are caught at the
template renderer boundary and replaced with an in-page error fragment.
"""


class MarkVaultError(Exception):
    """Base class for all MarkVault errors."""


class FatalBuildError(MarkVaultError):
    """An error that stops the build."""


class ContentNotFoundError(FatalBuildError):
    """A content directory does not exist."""


class ContentReadError(FatalBuildError):
    """A content file could not be read."""


class FrontMatterError(FatalBuildError):
    """The front matter block is not a valid YAML mapping."""


class BaseDocumentError(FatalBuildError):
    """The base HTML document is missing or unreadable."""


class MountNodeNotFoundError(FatalBuildError):
    """The base HTML document lacks the content mount element or <head>."""


class OutputDirectoryError(FatalBuildError):
    """The output directory cannot be cleaned or written."""


class RecoverablePageError(MarkVaultError):
    """An error confined to a single page."""


class UnknownTemplateError(RecoverablePageError):
    """A route names a template that does not exist."""

    def __init__(self, name):
        super().__init__(f'Template "{name}" not found')
        self.name = name


class MissingPageDataError(RecoverablePageError):
    """A template that needs page data was rendered without it."""


class TemplateRenderError(RecoverablePageError):
    """A fragment template failed while rendering."""
