import logging

logger = logging.getLogger(__name__)


class PendingBuffer:
    """Holds the one partial token carried over to the next chunk."""

    __slots__ = ("_data", "_kind")

    def __init__(self):
        self._kind = None
        self._data = ""

    @property
    def kind(self):
        return self._kind

    @property
    def data(self):
        return self._data

    def is_waiting(self):
        return self._kind is not None

    def wait(self, kind, data):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("suspending on partial %s token (%d chars)", kind, len(data))
        self._kind = kind
        self._data = data

    def unwait(self):
        if self._kind is None:
            return ""
        data = self._data
        self._kind = None
        self._data = ""
        return data


class TagStack:
    __slots__ = ("_names",)

    def __init__(self):
        self._names = []

    def push(self, name):
        self._names.append(name)

    def pop(self):
        if not self._names:
            return None
        return self._names.pop()

    def clear(self):
        self._names.clear()

    def is_empty(self):
        return not self._names

    def names(self):
        """Open tag names from outermost to innermost."""
        return list(self._names)
