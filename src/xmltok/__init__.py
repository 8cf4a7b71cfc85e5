from .errors import ParseError
from .stream import astream, stream, tokenize
from .tokenizer import Tokenizer, TokenizerOpts
from .tokens import CData, Comment, Node, NodeKind, ProcessingInstruction, TagClose, TagOpen, Text

__all__ = [
    "CData",
    "Comment",
    "Node",
    "NodeKind",
    "ParseError",
    "ProcessingInstruction",
    "TagClose",
    "TagOpen",
    "Text",
    "Tokenizer",
    "TokenizerOpts",
    "astream",
    "stream",
    "tokenize",
]
