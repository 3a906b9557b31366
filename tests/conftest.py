import pytest
import tree_sitter_javascript as tsjavascript
import tree_sitter_python as tspython
from sitterview import Language, Parser


@pytest.fixture
def python_language():
    return Language(tspython.language(), name="python")


@pytest.fixture
def javascript_language():
    return Language(tsjavascript.language(), name="javascript")


@pytest.fixture
def parser(python_language):
    return Parser(python_language)


@pytest.fixture
def js_parser(javascript_language):
    return Parser(javascript_language)

