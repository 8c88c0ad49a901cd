from __future__ import annotations


class HesabError(Exception):
    """Base class for errors raised by hesab itself."""


class PersistenceError(HesabError):
    """The storage backend failed (unreachable, unwritable, ...)."""


class DocumentFormatError(HesabError, ValueError):
    """A stored document could not be decoded."""


class DocumentNotReadyError(HesabError):
    """A mutation was attempted before the document was loaded."""


class UnknownMemberError(HesabError, KeyError):
    def __init__(self, member_id: str) -> None:
        super().__init__(f"unknown member_id '{member_id}'")
        self.member_id = member_id
