import pytest

from repolens.crawlers.github.errors import InvalidRepositoryReference
from repolens.crawlers.github.identity import parse_identity, resolve_identity
from repolens.models.repository import RepositoryIdentity


@pytest.mark.parametrize(
    "reference",
    [
        "acme/demo",
        "https://github.com/acme/demo",
        "https://github.com/acme/demo/",
        "https://github.com/acme/demo.git",
        "https://github.com/acme/demo/tree/main/src",
        "https://github.com/acme/demo/blob/main/README.md",
        "https://github.com/acme/demo?tab=readme-ov-file",
        "http://github.com/acme/demo",
        "https://www.github.com/acme/demo",
        "github.com/acme/demo",
        "git@github.com:acme/demo.git",
        "  https://github.com/acme/demo  ",
    ],
)
def test_equivalent_references_resolve_to_same_identity(reference: str) -> None:
    assert resolve_identity(reference) == RepositoryIdentity(owner="acme", name="demo")


def test_repo_names_with_dots_keep_everything_but_git_suffix() -> None:
    identity = resolve_identity("https://github.com/vercel/next.js.git")

    assert identity == RepositoryIdentity(owner="vercel", name="next.js")
    assert identity.full_name == "vercel/next.js"


@pytest.mark.parametrize(
    "reference",
    [
        "",
        "   ",
        "demo",
        "https://github.com/acme",
        "https://github.com/",
        "https://gitlab.com/acme/demo/extra",
        "github.com/demo",
        "acme/.git",
        "not a url at all",
        "a\x00b/demo",
        "https://github.com/acme/de\x7fmo",
        "acme/de\x01mo",
        "git@github.com:acme/de\x00mo.git",
    ],
)
def test_unresolvable_references_return_none(reference: str) -> None:
    assert resolve_identity(reference) is None


def test_parse_identity_raises_typed_error() -> None:
    with pytest.raises(InvalidRepositoryReference) as exc_info:
        parse_identity("https://github.com/acme")

    assert exc_info.value.reference == "https://github.com/acme"
    assert exc_info.value.retryable is False


def test_identity_is_immutable() -> None:
    identity = parse_identity("acme/demo")

    with pytest.raises(Exception):  # FrozenInstanceError or AttributeError
        identity.owner = "other"  # type: ignore[misc]
