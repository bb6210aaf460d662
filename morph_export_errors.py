# -*- coding: utf-8 -*-
"""
Errors raised while exporting morph data from a .duf file.
Everything fatal derives from MorphExportError so export_morph_data can report it in one place.
"""


class MorphExportError(Exception):
    """Base class for fatal export errors."""


class FormatError(MorphExportError):
    """Input file is not a .duf file."""


class FileAccessError(MorphExportError):
    """Input missing or unreadable, or output not writable."""


class DecompressionError(MorphExportError):
    """Byte stream is not valid gzip."""


class EncodingError(MorphExportError):
    """Decompressed bytes are not UTF-8 text."""


class ParseError(MorphExportError):
    """Text is not a valid DSON document."""


class DataError(MorphExportError):
    """Document content breaks an assumption the resolver relies on (duplicate ids, missing ids, bad values)."""


class ConfigError(MorphExportError):
    """Invalid export configuration file."""


class ResolutionWarning(UserWarning):
    """A modifier's parent is neither a known figure nor a known geometry. Never fatal."""

    def __init__(self, modifier_id, parent):
        self.modifier_id = modifier_id
        self.parent = parent
        super().__init__(f"Unable to find parent '{parent}' for modifier '{modifier_id}', skipping morph.")
