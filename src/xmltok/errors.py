"""Error codes, messages and the exception raised on malformed markup.

Every error raised by the tokenizer is terminal for the run that raised it.
Events yielded before the error remain valid.
"""


def generate_error_message(code, tag_name=None, tag_names=None):
    """Generate a human-readable message from an error code.

    Args:
        code: The error code string (kebab-case format)
        tag_name: Optional tag name to include in the message for context
        tag_names: Optional sequence of open tag names, innermost last

    Returns:
        Human-readable error message string
    """
    open_tags = ",".join(tag_names) if tag_names else ""
    messages = {
        # Markup declarations
        "unexpected-double-hyphen-in-comment": "Unexpected -- inside comment",
        "unrecognized-markup-declaration": "Unrecognized sequence after <! (only CDATA sections and comments are supported)",
        # Tags
        "tag-name-starts-with-whitespace": "Tag names may not start with whitespace",
        "mismatched-closing-tag": f"Unclosed tag: {tag_name}",
        "unexpected-closing-tag": f"Unexpected </{tag_name}> closing tag with no open tags",
        # End of input
        "eof-in-cdata": "Unclosed CDATA section",
        "eof-in-comment": "Unclosed comment",
        "eof-in-processing-instruction": "Unclosed processing instruction",
        "eof-in-tag": "Unclosed tag",
        "unclosed-tags": f"Unclosed tags: {open_tags}",
    }

    return messages.get(code, code)


class ParseError(Exception):
    """Raised when the input is not well-formed."""

    def __init__(self, code, *, offset=None, tag_name=None, tag_names=None, message=None):
        self.code = code
        self.offset = offset
        self.tag_name = tag_name
        self.tag_names = tuple(tag_names) if tag_names else ()
        self.message = message or generate_error_message(code, tag_name, self.tag_names)
        super().__init__(self.message)

    def __repr__(self):
        if self.offset is not None:
            return f"ParseError({self.code!r}, offset={self.offset})"
        return f"ParseError({self.code!r})"

    def __str__(self):
        if self.offset is not None:
            return f"(offset {self.offset}): {self.code} - {self.message}"
        return f"{self.code} - {self.message}"
