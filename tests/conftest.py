"""Shared test fixtures for the pipe preprocessor."""

import pytest

from pipe_preprocessor.models import RewriteOptions
from pipe_preprocessor.preprocessor import PipePreprocessor

SAMPLE_COMPONENT = """\
<script>
  let price = 29.99;
  let text = "hello world";
  let items = ["a", "b"];
</script>

<p>Price: {price | formatCurrency}</p>
<p>Text: {text | toUpperCase}</p>
<p>Complex: {price | formatCurrency:'EUR' | toUpperCase}</p>
{#each items as item}
  <li>{item | truncate:10, '...'}</li>
{/each}
"""


@pytest.fixture
def sample_component():
    return SAMPLE_COMPONENT


@pytest.fixture
def utils_options():
    return RewriteOptions(name_prefix="utils.")


@pytest.fixture
def preprocessor():
    return PipePreprocessor()


@pytest.fixture
def svelte_tree(tmp_path):
    """A small src/ tree with pipe-using, plain, and excluded templates."""
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    (src / "node_modules" / "pkg").mkdir(parents=True)
    (src / "App.svelte").write_text("<h1>{title | uppercase}</h1>\n<p>{total | currency:'USD'}</p>\n")
    (src / "lib" / "Plain.svelte").write_text("<p>{name}</p>\n")
    (src / "node_modules" / "pkg" / "Vendor.svelte").write_text("<p>{x | f}</p>\n")
    (src / "notes.txt").write_text("{x | f}\n")
    return src
