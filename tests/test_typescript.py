"""End-to-end tests: TypeScript source in, enhanced source out."""

import textwrap

import pytest

from lit_property_sugar import (
    FULL,
    MINIMAL,
    InvalidArgumentCount,
    InvalidArgumentKind,
    InferredType,
    MemberKind,
    SourceLocation,
    SourceSyntaxError,
    TypeInferenceError,
    transform,
)
from lit_property_sugar.resolver import resolve
from lit_property_sugar.typescript import collect_members, detect_language, get_parser


def _ts(text):
    return textwrap.dedent(text).lstrip("\n")


def _members(source, language="typescript"):
    data = source.encode("utf-8")
    tree = get_parser(language).parse(data)
    return [v.member for v in collect_members(tree.root_node, data)]


STANDARD = _ts("""
    interface MyInterface {}

    class MyElement extends LitElement {
      @property()
      myField: string;

      @property()
      expanded: boolean;

      @property({ type: Number })
      someValue: string;

      @property({ attribute: 'another-field' })
      anotherField: number;

      @property()
      field5: string[];

      @property()
      field6: 'value';

      @property()
      field7: MyInterface;

      @property()
      field8: { prop: string };

      @property()
      field9: 'blue' | 'green' | 'red';
    }
""")

STANDARD_OUTPUT = _ts("""
    interface MyInterface {}

    class MyElement extends LitElement {
      @property({ type: String, attribute: 'my-field', reflect: true })
      myField: string;

      @property({ type: Boolean, reflect: true })
      expanded: boolean;

      @property({ type: Number, attribute: 'some-value', reflect: true })
      someValue: string;

      @property({ attribute: 'another-field', type: Number, reflect: true })
      anotherField: number;

      @property({ type: Array })
      field5: string[];

      @property({ type: String, reflect: true })
      field6: 'value';

      @property({ type: Object })
      field7: MyInterface;

      @property({ type: Object })
      field8: { prop: string };

      @property({ type: String, reflect: true })
      field9: 'blue' | 'green' | 'red';
    }
""")

DEFAULT_VALUES = _ts("""
    export class MyClass extends LitElement {
      @property()
      field1 = 'abc';

      @property()
      field2 = true;

      @property()
      field3 = 42;

      @property()
      field4 = [1, 2, 3];

      @property()
      field5 = { a: 'abc', b: 'def' };
    }
""")


# ---------------------------------------------------------------------------
# Full rule set
# ---------------------------------------------------------------------------

class TestStandard:
    def test_output(self):
        result = transform(STANDARD)
        assert result.output == STANDARD_OUTPUT
        assert result.changed
        assert len(result.rewrites) == 9

    def test_idempotent(self):
        once = transform(STANDARD).output
        again = transform(once)
        assert again.output == once
        assert not again.changed
        assert again.rewrites == []


def test_default_values_full():
    out = transform(DEFAULT_VALUES).output
    assert "@property({ type: String, reflect: true })\n  field1 = 'abc';" in out
    assert "@property({ type: Boolean, reflect: true })\n  field2 = true;" in out
    assert "@property({ type: Number, reflect: true })\n  field3 = 42;" in out
    assert "@property({ type: Array })\n  field4 = [1, 2, 3];" in out
    assert "@property({ type: Object })\n  field5 = { a: 'abc', b: 'def' };" in out


def test_decorated_getter():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          get myField(): string {
            return this._val;
          }
        }
    """)
    out = transform(source).output
    assert out == source.replace(
        "@property()",
        "@property({ type: String, attribute: 'my-field', reflect: true })",
    )


def test_untyped_getter_fails():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          get myField() {
            return this._val;
          }
        }
    """)
    with pytest.raises(TypeInferenceError):
        transform(source)


def test_multiline_options_rewritten():
    source = _ts("""
        class MyElement extends LitElement {
          @property({
            type: Number,
          })
          count: number;
        }
    """)
    out = transform(source).output
    assert "@property({ type: Number, reflect: true })\n  count: number;" in out


def test_untouched_members_and_text():
    source = _ts("""
        // héllo: non-ASCII before the edit
        class MyElement extends LitElement {
          @state()
          private _open = false;

          @property
          bare: string;

          plain = 1;

          @property()
          myField: string;

          render() {
            return html`<p>${this.myField}</p>`;
          }
        }
    """)
    result = transform(source)
    assert result.output == source.replace(
        "@property()",
        "@property({ type: String, attribute: 'my-field', reflect: true })",
    )
    assert [r.member.name for r in result.rewrites] == ["myField"]


def test_unrelated_options_preserved():
    source = _ts("""
        class MyElement extends LitElement {
          @property({ hasChanged: (a, b) => a !== b })
          value: number;
        }
    """)
    out = transform(source).output
    assert "@property({ hasChanged: (a, b) => a !== b, type: Number, reflect: true })" in out


def test_inferred_options_precede_spread():
    source = _ts("""
        class MyElement extends LitElement {
          @property({ ...base })
          myField: string;

          @property({ attribute: 'x', ...base, hasChanged })
          count: number;
        }
    """)
    out = transform(source).output
    assert "@property({ type: String, attribute: 'my-field', reflect: true, ...base })" in out
    assert "@property({ attribute: 'x', type: Number, reflect: true, ...base, hasChanged })" in out


@pytest.mark.parametrize(
    "key",
    [r"'\x74ype'", r"'type'", r"'\u{74}ype'", r"'ty\
pe'", r"'\164ype'"],
)
def test_escaped_string_key_counts_as_explicit(key):
    source = _ts("""
        class MyElement extends LitElement {
          @property({ KEY: Number })
          someValue: string;
        }
    """).replace("KEY", key)
    out = transform(source).output
    assert f"@property({{ {key}: Number, attribute: 'some-value', reflect: true }})" in out


def test_generic_array_and_parenthesized_union():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          items: Array<string>;

          @property()
          mode: 'a' | ('b' | 'c');
        }
    """)
    out = transform(source).output
    assert "@property({ type: Array })\n  items" in out
    assert "@property({ type: String, reflect: true })\n  mode" in out


def test_nested_classes_all_visited():
    source = _ts("""
        class Outer extends LitElement {
          @property()
          outerValue: number;

          make() {
            return class Inner extends LitElement {
              @property()
              innerValue: boolean;
            };
          }
        }
    """)
    result = transform(source)
    assert [r.member.name for r in result.rewrites] == ["outerValue", "innerValue"]
    assert "@property({ type: Boolean, attribute: 'inner-value', reflect: true })" in result.output


def test_tsx_language():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          myField: string;

          render() {
            return <div>{this.myField}</div>;
          }
        }
    """)
    out = transform(source, FULL, "tsx").output
    assert "@property({ type: String, attribute: 'my-field', reflect: true })" in out


# ---------------------------------------------------------------------------
# Minimal rule set
# ---------------------------------------------------------------------------

def test_default_values_minimal():
    out = transform(DEFAULT_VALUES, MINIMAL).output
    assert "@property()\n  field1 = 'abc';" in out
    assert "@property({ type: Boolean })\n  field2 = true;" in out
    assert "@property({ type: Number })\n  field3 = 42;" in out
    assert "@property({ type: Array })\n  field4 = [1, 2, 3];" in out
    assert "@property({ type: Object })\n  field5 = { a: 'abc', b: 'def' };" in out


def test_attribute_false_minimal():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          attributeField: boolean;

          @property({ attribute: false })
          nonAttributeField;
        }
    """)
    out = transform(source, MINIMAL).output
    assert "@property({ type: Boolean })\n  attributeField" in out
    assert "@property({ attribute: false })\n  nonAttributeField;" in out


def test_string_union_minimal_untouched():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          field: 'blue' | 'green' | 'red';
        }
    """)
    result = transform(source, MINIMAL)
    assert result.output == source
    assert not result.changed


# ---------------------------------------------------------------------------
# Failures abort the whole unit
# ---------------------------------------------------------------------------

def test_missing_type_fails_with_location():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          myField: string;

          @property()
          mystery;
        }
    """)
    with pytest.raises(TypeInferenceError) as exc_info:
        transform(source)
    assert exc_info.value.location == SourceLocation(line=5, column=2)


def test_location_column_counts_characters():
    source = _ts("""
        class MyElement extends LitElement {
          /* ééééé */ @property() mystery;
        }
    """)
    with pytest.raises(TypeInferenceError) as exc_info:
        transform(source)
    error = exc_info.value
    assert error.location == SourceLocation(line=2, column=14)
    frame = error.code_frame(source)
    caret = next(line for line in frame.splitlines() if line.strip().endswith("^"))
    marked = next(line for line in frame.splitlines() if line.lstrip().startswith("> 2"))
    assert marked[caret.index("^")] == "@"


def test_constructor_default_fails():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          data = new Map();
        }
    """)
    with pytest.raises(TypeInferenceError):
        transform(source)


def test_mixed_union_fails():
    source = _ts("""
        class MyElement extends LitElement {
          @property()
          value: string | number;
        }
    """)
    with pytest.raises(TypeInferenceError):
        transform(source)


def test_too_many_arguments():
    source = _ts("""
        class MyElement extends LitElement {
          @property({ type: String }, extra)
          myField: string;
        }
    """)
    with pytest.raises(InvalidArgumentCount) as exc_info:
        transform(source)
    assert exc_info.value.count == 2
    assert exc_info.value.location == SourceLocation(line=2, column=3)


def test_non_object_argument():
    source = _ts("""
        class MyElement extends LitElement {
          @property(options)
          myField: string;
        }
    """)
    with pytest.raises(InvalidArgumentKind):
        transform(source)


def test_syntax_error():
    with pytest.raises(SourceSyntaxError):
        transform("class MyElement {\n  @property(\n}\n")


# ---------------------------------------------------------------------------
# Tree → model conversion
# ---------------------------------------------------------------------------

def test_collect_member_kinds():
    members = _members(_ts("""
        class A {
          @property()
          get value(): number { return 1; }

          @property()
          set value(v: number) {}

          @property()
          helper(): string { return ''; }

          field = 1;
        }
    """))
    assert [(m.name, m.kind) for m in members] == [
        ("value", MemberKind.Getter),
        ("value", MemberKind.Setter),
        ("helper", MemberKind.Method),
        ("field", MemberKind.Field),
    ]
    assert [len(m.decorators) for m in members] == [1, 1, 1, 0]
    assert [resolve(m) for m in members] == [
        InferredType.Number,
        InferredType.Unknown,
        InferredType.Unknown,
        InferredType.Number,
    ]


def test_literal_types_resolve():
    members = _members(_ts("""
        class A {
          a: true;
          b: 42;
          c: 'x';
          d: any;
          e: boolean | false;
        }
    """))
    assert [resolve(m) for m in members] == [
        InferredType.Boolean,
        InferredType.Number,
        InferredType.String,
        InferredType.Unknown,
        InferredType.Boolean,
    ]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("my-element.ts", "typescript"),
        ("my-element.js", "typescript"),
        ("my-element.mjs", "typescript"),
        ("my-element.tsx", "tsx"),
        ("MY-ELEMENT.TS", "typescript"),
        ("styles.css", None),
    ],
)
def test_detect_language(path, expected):
    assert detect_language(path) == expected


def test_unsupported_language():
    with pytest.raises(ValueError, match="unsupported language"):
        get_parser("cobol")
