"""Core data models for OSF converters"""

from functools import cached_property
from typing import Annotated, Any, Literal, Optional, Union

from loguru import logger
from pydantic import (
    BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, ValidationError,
    field_validator
)

from .enums import BlockKind, Orientation, PageSize, RunStyle, UnitKind
from .exceptions import DocumentError
from config import settings


CellValue = Union[bool, int, float, str]


class FrozenModel(BaseModel):
    """Immutable model base for caller-owned input"""
    model_config = ConfigDict(frozen=True)


# ─────────────────────────────────────────────────────────────
# Inline runs (slide content)
# ─────────────────────────────────────────────────────────────

class TextRun(FrozenModel):
    type: Literal["text"] = "text"
    text: str = ""
    bold: bool = False
    italic: bool = False


class LinkRun(FrozenModel):
    type: Literal["link"] = "link"
    text: str = ""
    url: str = ""


class ImageRun(FrozenModel):
    type: Literal["image"] = "image"
    alt: str = ""
    url: str = ""


InlineRun = Annotated[Union[TextRun, LinkRun, ImageRun], Field(discriminator="type")]

_RUN_TYPES = ("text", "link", "image")


def _coerce_runs(value: Any) -> list:
    """Normalise parser run lists: bare strings become text runs"""
    if value is None:
        return []
    if isinstance(value, (str, dict, BaseModel)):
        value = [value]
    if not isinstance(value, (list, tuple)):
        logger.warning(f"Inline content is not a list ({type(value).__name__}); treating as empty")
        return []

    runs = []
    for item in value:
        if isinstance(item, str):
            runs.append({"type": "text", "text": item})
        elif isinstance(item, dict):
            if item.get("type") in _RUN_TYPES:
                runs.append(item)
            elif item.get("text"):
                runs.append({"type": "text", "text": str(item["text"])})
            else:
                logger.debug(f"Dropping inline run without text: {item!r}")
        elif isinstance(item, (TextRun, LinkRun, ImageRun)):
            runs.append(item)
        else:
            logger.debug(f"Dropping inline run of type {type(item).__name__}")
    return runs


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


# ─────────────────────────────────────────────────────────────
# Slide content
# ─────────────────────────────────────────────────────────────

class ParagraphContent(FrozenModel):
    type: Literal["paragraph"] = "paragraph"
    content: list[InlineRun] = []

    @field_validator("content", mode="before")
    @classmethod
    def _runs(cls, value):
        return _coerce_runs(value)


class ListItem(FrozenModel):
    content: list[InlineRun] = []

    @field_validator("content", mode="before")
    @classmethod
    def _runs(cls, value):
        return _coerce_runs(value)


class ListContent(FrozenModel):
    type: Literal["unordered_list"] = "unordered_list"
    items: list[ListItem] = []

    @field_validator("items", mode="before")
    @classmethod
    def _items(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        items = []
        for item in value:
            if isinstance(item, (str, list)):
                items.append({"content": item})
            elif isinstance(item, (dict, ListItem)):
                items.append(item)
            else:
                logger.debug(f"Dropping list item of type {type(item).__name__}")
        return items


SlideContent = Annotated[Union[ParagraphContent, ListContent], Field(discriminator="type")]

_SLIDE_CONTENT_TYPES = ("paragraph", "unordered_list")


# ─────────────────────────────────────────────────────────────
# Blocks
# ─────────────────────────────────────────────────────────────

class MetaBlock(FrozenModel):
    """Document metadata (title, author, date, theme, ...)"""
    type: Literal["meta"] = "meta"
    props: dict[str, Any] = Field(default_factory=dict)

    @field_validator("props", mode="before")
    @classmethod
    def _props(cls, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            logger.warning(f"Meta props are not a mapping ({type(value).__name__}); treating as empty")
            return {}
        return {str(key): item for key, item in value.items()}

    def _prop(self, key: str) -> Optional[str]:
        value = self.props.get(key)
        if value is None or value == "":
            return None
        return str(value)

    @property
    def title(self) -> Optional[str]:
        return self._prop("title")

    @property
    def author(self) -> Optional[str]:
        return self._prop("author")

    @property
    def date(self) -> Optional[str]:
        return self._prop("date")

    @property
    def theme(self) -> Optional[str]:
        return self._prop("theme")


class DocBlock(FrozenModel):
    """Free-form prose with lightweight markdown markers"""
    type: Literal["doc"] = "doc"
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def _content(cls, value):
        return "" if value is None else str(value)


class SlideBlock(FrozenModel):
    """A presentation slide with an optional title"""
    type: Literal["slide"] = "slide"
    title: Optional[str] = None
    layout: Optional[str] = None
    content: list[SlideContent] = []

    @field_validator("title", "layout", mode="before")
    @classmethod
    def _text(cls, value):
        return _optional_text(value)

    @field_validator("content", mode="before")
    @classmethod
    def _known_content(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        known = []
        for item in value:
            kind = item.get("type") if isinstance(item, dict) else getattr(item, "type", None)
            if kind in _SLIDE_CONTENT_TYPES:
                known.append(item)
            else:
                logger.debug(f"Skipping unsupported slide content: {kind!r}")
        return known


class FormulaEntry(FrozenModel):
    """Formula anchored at a (row, col) coordinate"""
    cell: tuple[Annotated[int, Field(ge=1)], Annotated[int, Field(ge=1)]]
    expr: str


class SheetBlock(FrozenModel):
    """Sparse spreadsheet: coordinate-keyed cells plus formulas"""
    type: Literal["sheet"] = "sheet"
    name: Optional[str] = None
    cols: Optional[Union[list[Any], str]] = None
    data: dict[Any, Any] = Field(default_factory=dict)
    formulas: list[FormulaEntry] = []

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value):
        return _optional_text(value)

    @field_validator("cols", mode="before")
    @classmethod
    def _cols(cls, value):
        if value is None or isinstance(value, (list, str)):
            return value
        if isinstance(value, tuple):
            return list(value)
        logger.warning(f"Sheet cols is neither a list nor a string ({type(value).__name__}); ignoring")
        return None

    @field_validator("data", mode="before")
    @classmethod
    def _data(cls, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            logger.warning(f"Sheet data is not a mapping ({type(value).__name__}); treating as empty")
            return {}
        return value

    @field_validator("formulas", mode="before")
    @classmethod
    def _formulas(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        entries = []
        for entry in value:
            try:
                entries.append(FormulaEntry.model_validate(entry))
            except ValidationError:
                logger.warning(f"Skipping malformed formula entry: {entry!r}")
        return entries


class UnknownBlock(FrozenModel):
    """Block of a kind this version does not render"""
    model_config = ConfigDict(frozen=True, extra="allow")
    type: Any = None


_KNOWN_KINDS = tuple(kind.value for kind in BlockKind)


def _block_tag(value: Any) -> str:
    if isinstance(value, UnknownBlock):
        return "unknown"
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in _KNOWN_KINDS else "unknown"


Block = Annotated[
    Union[
        Annotated[MetaBlock, Tag("meta")],
        Annotated[DocBlock, Tag("doc")],
        Annotated[SlideBlock, Tag("slide")],
        Annotated[SheetBlock, Tag("sheet")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(_block_tag),
]

_BLOCK_ADAPTER = TypeAdapter(Block)


def _validate_block(index: int, data: dict) -> Any:
    """Validate one block; a malformed block is kept as an UnknownBlock"""
    try:
        return _BLOCK_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.warning(
            f"Block {index} ({data.get('type')!r}) is malformed and will be skipped: "
            f"{e.error_count()} validation error(s)"
        )
        return UnknownBlock.model_validate({str(key): item for key, item in data.items()})


class Document(FrozenModel):
    """Parsed OSF document: blocks in render order"""
    blocks: list[Block] = []

    @field_validator("blocks", mode="before")
    @classmethod
    def _blocks(cls, value):
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise DocumentError(
                f"Document blocks must be a list, got {type(value).__name__}",
                field="blocks"
            )
        blocks = []
        for index, item in enumerate(value):
            if isinstance(item, BaseModel):
                blocks.append(item)
            elif isinstance(item, dict):
                blocks.append(_validate_block(index, item))
            else:
                logger.warning(f"Skipping block that is not a mapping: {item!r}")
        return blocks

    @classmethod
    def from_dict(cls, data: Any) -> "Document":
        """Build a document from the parser's JSON shape"""
        if isinstance(data, Document):
            return data
        if not isinstance(data, dict):
            raise DocumentError(f"Expected a mapping with 'blocks', got {type(data).__name__}")
        return cls.model_validate(data)

    def first_meta(self) -> Optional[MetaBlock]:
        for block in self.blocks:
            if isinstance(block, MetaBlock):
                return block
        return None


# ─────────────────────────────────────────────────────────────
# Derived structures
# ─────────────────────────────────────────────────────────────

class StyledRun(BaseModel):
    """Contiguous text fragment with its active inline styles"""
    text: str
    styles: frozenset[RunStyle] = frozenset()

    @property
    def bold(self) -> bool:
        return RunStyle.BOLD in self.styles

    @property
    def italic(self) -> bool:
        return RunStyle.ITALIC in self.styles

    @property
    def code(self) -> bool:
        return RunStyle.CODE in self.styles

    @property
    def plain(self) -> bool:
        return not self.styles


class ContentUnit(BaseModel):
    """Heading, list item or paragraph split out of doc prose"""
    kind: UnitKind
    text: str
    level: int = 0


class MaterializedGrid(BaseModel):
    """Dense reconstruction of a sparse cell map"""
    headers: list[str] = []
    rows: list[list[Any]] = []
    row_count: int = 0
    col_count: int = 0

    @property
    def width(self) -> int:
        """Column count a rectangular table needs to hold headers and data"""
        return max(self.col_count, len(self.headers))


class TranslatedFormula(BaseModel):
    """Formula rewritten into column-letter/row-number addressing"""
    row: int
    col: int
    address: str
    source: str
    expression: str


class SheetView(BaseModel):
    """Everything a backend needs to render one sheet block"""
    name: Optional[str] = None
    grid: MaterializedGrid
    formulas: list[TranslatedFormula] = []

    def formula_at(self, row: int, col: int) -> Optional[TranslatedFormula]:
        """Formula targeting (row, col); a later entry for the same cell wins"""
        return self.formula_index.get((row, col))

    @cached_property
    def formula_index(self) -> dict[tuple[int, int], TranslatedFormula]:
        return {(formula.row, formula.col): formula for formula in self.formulas}


class DocumentMetadata(BaseModel):
    """Title/author/date header emitted for meta blocks"""
    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    theme: Optional[str] = None

    @classmethod
    def from_block(cls, block: Optional[MetaBlock]) -> "DocumentMetadata":
        if block is None:
            return cls()
        return cls(title=block.title, author=block.author, date=block.date, theme=block.theme)

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.author or self.date)


# ─────────────────────────────────────────────────────────────
# Conversion contract
# ─────────────────────────────────────────────────────────────

class Margins(BaseModel):
    """Page margins in inches"""
    top: float = 1.0
    right: float = 1.0
    bottom: float = 1.0
    left: float = 1.0


class ConversionOptions(BaseModel):
    """Caller options; unset fields fall back to settings or backend defaults"""
    theme: Optional[str] = None
    include_metadata: Optional[bool] = None
    page_size: Optional[PageSize] = None
    orientation: Optional[Orientation] = None
    margins: Optional[Margins] = None
    custom_styles: dict[str, Any] = Field(default_factory=dict)

    def resolved(self, include_metadata_default: bool) -> "ConversionOptions":
        """Copy with every field filled from settings and the backend default"""
        margin = settings.DEFAULT_MARGIN_INCHES
        return self.model_copy(update={
            "theme": self.theme or settings.DEFAULT_THEME,
            "include_metadata": (
                include_metadata_default if self.include_metadata is None
                else self.include_metadata
            ),
            "page_size": self.page_size or PageSize(settings.DEFAULT_PAGE_SIZE),
            "orientation": self.orientation or Orientation(settings.DEFAULT_ORIENTATION),
            "margins": self.margins or Margins(top=margin, right=margin, bottom=margin, left=margin),
        })


class OutputArtifact(BaseModel):
    """Opaque payload produced by a backend"""
    content: bytes
    mime_type: str
    extension: str

    @property
    def size(self) -> int:
        return len(self.content)
