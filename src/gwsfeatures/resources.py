from dataclasses import asdict, fields, is_dataclass
from typing import Self


class GoogleWorkSpaceResourceBase():
    """
    Mixin for the dataclasses that mirror API structures.  Not a dataclass
    itself; subclasses with derived or nested fields override fixup() and
    call it from __post_init__.
    """
    def to_base(self) -> dict:
        """
        Plain dict form of the resource, ready to hand to the API client.
        fixup() runs first so the fields are normalized.
        """
        self.fixup()
        return asdict(self)

    def trim(self) -> dict:
        """
        to_base() minus the top level fields that are None, or empty strings
        and containers.  Numbers and bools are kept even when falsy, since 0
        is a real sheet ID or index.  Many requests want only set fields.
        """
        b = self.to_base()
        for k, v in list(b.items()):
            if v is None or (type(v) not in [int, bool, float] and not v):
                del b[k]
        return b

    def fixup(self) -> None:
        """Hook for field normalization."""
        pass

    @classmethod
    def from_response(cls, response: dict|None) -> Self:
        """
        Build from a raw response dict.  The API hands back whatever fields
        were asked for, so anything the dataclass doesn't know is dropped
        rather than blowing up the initializer.
        """
        if not is_dataclass(cls):
            raise TypeError(f"{cls.__name__} is not a dataclass")
        names = {f.name for f in fields(cls) if f.init}
        return cls(**{k: v for k, v in dict(response or {}).items() if k in names})
