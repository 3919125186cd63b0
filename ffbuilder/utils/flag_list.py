class FlagList:
    """Append-only sequence of configure flags.

    A flag that is already present is ignored, so the first contributor
    decides its position.
    """

    def __init__(self, flags=()):
        self._flags = []
        self._seen = set()
        self.extend(flags)

    def append(self, flag: str) -> bool:
        """Add ``flag`` unless present. Returns True if it was added."""
        if flag in self._seen:
            return False
        self._seen.add(flag)
        self._flags.append(flag)
        return True

    def extend(self, flags):
        for flag in flags:
            self.append(flag)

    def as_tuple(self) -> tuple:
        return tuple(self._flags)

    def __contains__(self, flag):
        return flag in self._seen

    def __iter__(self):
        return iter(self._flags)

    def __len__(self):
        return len(self._flags)

    def __repr__(self):
        return f"FlagList({self._flags!r})"
