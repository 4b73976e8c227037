"""lit-property-sugar: infer @property decorator options from member types."""

from .engine import Rewrite, enhance, enhance_member
from .errors import (
    EnhanceError,
    InvalidArgumentCount,
    InvalidArgumentKind,
    SourceSyntaxError,
    TypeInferenceError,
)
from .locator import locate
from .model import (
    ArrayLiteral,
    ArrayOf,
    BooleanLiteral,
    Decorator,
    DecoratorCall,
    FieldDeclaration,
    Identifier,
    InferredType,
    Literal,
    MemberKind,
    NumericLiteral,
    ObjectEntry,
    ObjectLiteral,
    OptionsMap,
    Other,
    OtherExpression,
    Primitive,
    Reference,
    SourceLocation,
    StringLiteral,
    StructuralShape,
    UnionOf,
)
from .naming import to_kebab_case
from .resolver import resolve, resolve_annotation, resolve_value
from .rules import FULL, MINIMAL, Rules, preset
from .synthesizer import synthesize
from .typescript import TransformResult, transform

__version__ = "0.1.0"

__all__ = [
    "transform",
    "TransformResult",
    "enhance",
    "enhance_member",
    "Rewrite",
    "locate",
    "resolve",
    "resolve_annotation",
    "resolve_value",
    "synthesize",
    "to_kebab_case",
    "Rules",
    "FULL",
    "MINIMAL",
    "preset",
    "EnhanceError",
    "InvalidArgumentCount",
    "InvalidArgumentKind",
    "SourceSyntaxError",
    "TypeInferenceError",
    "ArrayLiteral",
    "ArrayOf",
    "BooleanLiteral",
    "Decorator",
    "DecoratorCall",
    "FieldDeclaration",
    "Identifier",
    "InferredType",
    "Literal",
    "MemberKind",
    "NumericLiteral",
    "ObjectEntry",
    "ObjectLiteral",
    "OptionsMap",
    "Other",
    "OtherExpression",
    "Primitive",
    "Reference",
    "SourceLocation",
    "StringLiteral",
    "StructuralShape",
    "UnionOf",
]
