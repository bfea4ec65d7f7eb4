"""
Tests for Type Scope Tracking.

Verifies:
1. Innermost containing type resolution.
2. Function and lambda braces do not create type scopes.
3. Braces inside string literals are ignored.
4. Headers continuing across lines still find their body.
5. Unclosed bodies are reported as unterminated.
"""

from ktbridge.frontends.kotlin.scopes import build_scope_index, find_type_body, mask_literals


def test_nested_types():
  text = "class A {\n  object B {\n    val x = 1\n  }\n  val y = 2\n}\nval z = 3\n"
  index = build_scope_index(text)

  assert index.containing_type(text.index("x")) == "B"
  assert index.containing_type(text.index("y")) == "A"
  assert index.containing_type(text.index("z")) is None
  assert index.unterminated == []


def test_function_bodies_are_not_scopes():
  text = "class A {\n  fun f() {\n    run { g() }\n  }\n  val after = 1\n}\n"
  index = build_scope_index(text)

  assert [r.name for r in index.ranges] == ["A"]
  assert index.containing_type(text.index("after")) == "A"


def test_braces_in_strings_are_ignored():
  text = 'class A {\n  val s = "}"\n  fun x() {}\n}\n'
  index = build_scope_index(text)
  assert index.containing_type(text.index("fun")) == "A"


def test_mask_literals_keeps_offsets():
  text = 'val s = "a{b}" + \'c\''
  masked = mask_literals(text)
  assert len(masked) == len(text)
  assert "{" not in masked
  assert masked.startswith('val s = "')


def test_header_continuation():
  text = "class A : B,\n  C {\n}\n"
  assert find_type_body(text, text.index("A") + 1) == text.index("{")


def test_header_without_body():
  text = "interface Marker\nfun other() {}\n"
  assert find_type_body(text, text.index("Marker") + len("Marker")) is None


def test_expression_body_has_no_type_body():
  text = "object A : B = c\n"
  assert find_type_body(text, text.index("A") + 1) is None


def test_unterminated_scope():
  text = "class Open {\n  val x = 1\n"
  index = build_scope_index(text)

  assert index.ranges == []
  assert index.is_unterminated(text.index("x"))
  assert index.is_unterminated_header(text.index("Open"))
  assert not index.is_unterminated_header(0)
