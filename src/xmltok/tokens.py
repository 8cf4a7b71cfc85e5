class NodeKind:
    __slots__ = ()

    TEXT = "text"
    CDATA = "cdata"
    COMMENT = "comment"
    PROCESSING_INSTRUCTION = "processinginstruction"
    TAG_OPEN = "tagopen"
    TAG_CLOSE = "tagclose"

    # Pending-token kind for a bare "<!" at the end of the available input.
    # Never emitted as an event.
    MARKUP_DECLARATION = "markupdeclaration"

    ALL = frozenset((TEXT, CDATA, COMMENT, PROCESSING_INSTRUCTION, TAG_OPEN, TAG_CLOSE))


class Node:
    """Base class for the events yielded by the tokenizer."""

    __slots__ = ()

    kind = None

    def as_tuple(self):
        return (self.kind, *(getattr(self, name) for name in self.__slots__))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    __hash__ = None  # Unhashable since we define __eq__

    def __repr__(self):
        fields = ", ".join(repr(getattr(self, name)) for name in self.__slots__)
        return f"{type(self).__name__}({fields})"


class Text(Node):
    __slots__ = ("data",)

    kind = NodeKind.TEXT

    def __init__(self, data):
        self.data = data


class CData(Node):
    __slots__ = ("data",)

    kind = NodeKind.CDATA

    def __init__(self, data):
        self.data = data


class Comment(Node):
    __slots__ = ("data",)

    kind = NodeKind.COMMENT

    def __init__(self, data):
        self.data = data


class ProcessingInstruction(Node):
    __slots__ = ("data",)

    kind = NodeKind.PROCESSING_INSTRUCTION

    def __init__(self, data):
        self.data = data


class TagOpen(Node):
    __slots__ = ("name", "attrs", "self_closing")

    kind = NodeKind.TAG_OPEN

    def __init__(self, name, attrs="", self_closing=False):
        self.name = name
        # Raw attribute text, trimmed but otherwise unparsed.
        self.attrs = attrs
        self.self_closing = bool(self_closing)

    def __repr__(self):
        closing = ", self_closing=True" if self.self_closing else ""
        return f"TagOpen({self.name!r}, {self.attrs!r}{closing})"


class TagClose(Node):
    __slots__ = ("name",)

    kind = NodeKind.TAG_CLOSE

    def __init__(self, name):
        self.name = name
