"""
Tests for the Manifest Codec.

Verifies:
1. Encoding layout (banner, headers, optional keys only when set).
2. Decoding of all three kinds, including varargs, nullables and defaults.
3. Tolerance: unknown kinds, stray lines and malformed entries are skipped.
4. Scanner output survives an encode/decode cycle unchanged.
"""

from ktbridge.frontends.kotlin import KotlinScanner
from ktbridge.manifest import decode, encode
from ktbridge.manifest.codec import (
  MANIFEST_BANNER,
  decode_parameter,
  decode_subclass,
  encode_parameter,
  encode_subclass,
)
from ktbridge.model import (
  AsyncFunctionDeclaration,
  ParameterDeclaration,
  PropertyDeclaration,
  StreamDeclaration,
  SubclassVariant,
  SumTypeDeclaration,
)

RESULT = SumTypeDeclaration(
  qualified_name="com.example.Result",
  simple_name="Result",
  namespace="com.example",
  type_parameters=("out T",),
  subclasses=(
    SubclassVariant("Success", (PropertyDeclaration("data", "T"),)),
    SubclassVariant("Loading", is_object=True),
  ),
)

FETCH = AsyncFunctionDeclaration(
  qualified_name="com.example.Repo.fetch",
  simple_name="fetch",
  namespace="com.example",
  parameters=(
    ParameterDeclaration("id", "String"),
    ParameterDeclaration("limit", "Int", default_value="10"),
  ),
  return_type="String",
  enclosing_type="Repo",
)


def test_encode_layout():
  text = encode([RESULT, FETCH])

  assert text == (
    "# ktbridge manifest\n"
    "\n"
    "[sum:com.example.Result]\n"
    "name=Result\n"
    "namespace=com.example\n"
    "exhaustive=true\n"
    "typeParams=out T\n"
    "subclass=Success|data:T|false\n"
    "subclass=Loading||true\n"
    "\n"
    "[async:com.example.Repo.fetch]\n"
    "name=fetch\n"
    "namespace=com.example\n"
    "failable=true\n"
    "return=String\n"
    "class=Repo\n"
    "param=id:String\n"
    "param=limit:Int=10\n"
  )


def test_encode_empty():
  assert encode([]) == MANIFEST_BANNER + "\n"


def test_decode_round_trip_of_handwritten_records():
  assert decode(encode([RESULT, FETCH])) == [RESULT, FETCH]


def test_decode_stream_and_optional_keys():
  text = """
[stream:com.example.Repo.updates]
name=updates
namespace=com.example
element=List<Int>
class=Repo
isProperty=true
hasAnnotation=true

[sum:com.example.Shape]
name=Shape
exhaustive=false
rename=SwiftShape
conformances=Equatable, Sendable
"""
  stream, shape = decode(text)

  assert stream == StreamDeclaration(
    qualified_name="com.example.Repo.updates",
    simple_name="updates",
    namespace="com.example",
    element_type="List<Int>",
    enclosing_type="Repo",
    is_property=True,
    has_annotation=True,
  )
  assert shape.is_exhaustive is False
  assert shape.rename == "SwiftShape"
  assert shape.has_annotation is True
  assert shape.conformances == ("Equatable", "Sendable")
  # Missing namespace falls back to the qualified-name prefix
  assert shape.namespace == "com.example"


def test_decode_skips_unknown_and_malformed():
  text = """
# leading comment
stray=value
[widget:com.example.Thing]
name=Thing
[async:com.example.run]
no equals sign here
=missing key
name=run
param=broken
param=ok:Int
[stream:com.example.noElement]
name=noElement
"""
  (run,) = decode(text)
  assert run.simple_name == "run"
  assert run.parameters == (ParameterDeclaration("ok", "Int"),)
  assert run.return_type == "Unit"


def test_parameter_codec():
  param = ParameterDeclaration("ids", "String", is_nullable=True, default_value="null", is_vararg=True)
  assert encode_parameter(param) == "vararg ids:String?=null"
  assert decode_parameter("vararg ids:String?=null") == param

  # Only the first '=' splits off the default
  assert decode_parameter('sep:String="a=b"').default_value == '"a=b"'
  assert decode_parameter("nameOnly") is None
  assert decode_parameter(":Int") is None


def test_subclass_codec():
  variant = SubclassVariant("Error", (PropertyDeclaration("message", "String"), PropertyDeclaration("code", "Int", True)))
  assert encode_subclass(variant) == "Error|message:String,code:Int?|false"
  assert decode_subclass("Error|message:String,code:Int?|false") == variant

  assert decode_subclass("Pair|value:Map<String, Int>|false").properties == (
    PropertyDeclaration("value", "Map<String, Int>"),
  )
  assert decode_subclass("Broken|x:Int") is None
  assert decode_subclass("|x:Int|false") is None


def test_scanned_declarations_round_trip(network_result_source, user_repository_source):
  scanner = KotlinScanner()
  decls = scanner.scan(network_result_source) + scanner.scan(user_repository_source)

  assert decode(encode(decls)) == decls
