"""Block tree model: closed block type enum with a typed payload per type."""

from enum import Enum

from pydantic import BaseModel, Field


class BlockType(str, Enum):
    """Block types the renderer knows about. Anything else maps to OTHER."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    CODE = "code"
    QUOTE = "quote"
    CALLOUT = "callout"
    TOGGLE = "toggle"
    TO_DO = "to_do"
    DIVIDER = "divider"
    CHILD_PAGE = "child_page"
    OTHER = "other"

    @classmethod
    def from_api(cls, value: str | None) -> "BlockType":
        """Map a Notion API type string to a BlockType, falling back to OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class Annotations(BaseModel):
    """Inline formatting flags of a rich text run."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"


class RichText(BaseModel):
    """One rich text run. Extra API fields (type, text, mention...) are ignored."""

    plain_text: str = ""
    href: str | None = None
    annotations: Annotations = Field(default_factory=Annotations)


class TextContent(BaseModel):
    """Payload of text-bearing blocks (paragraph, headings, list items, quote...)."""

    rich_text: list[RichText] = Field(default_factory=list)


class CodeContent(BaseModel):
    """Payload of code blocks."""

    rich_text: list[RichText] = Field(default_factory=list)
    language: str = ""


class ToDoContent(BaseModel):
    """Payload of to_do blocks."""

    rich_text: list[RichText] = Field(default_factory=list)
    checked: bool = False


BlockContent = TextContent | CodeContent | ToDoContent


class Block(BaseModel):
    """A node of a page's content tree.

    ``children`` is only populated after an explicit fetch; the raw record's
    ``has_children`` flag is not kept.
    """

    id: str = ""
    type: BlockType
    content: BlockContent | None = None
    children: list["Block"] = Field(default_factory=list)
