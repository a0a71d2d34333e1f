from __future__ import annotations

import pytest
from pydantic import ValidationError

from ogcache.core.errors import EmptyInputError, MissingTitleError, MissingURLError
from ogcache.models.opengraph.keys import OpenGraphKey
from ogcache.models.opengraph.record import OpenGraph, OpenGraphTag

_URL = "https://example.com/p"

ROCK = "https://ia.media-imdb.com/images/rock.jpg"
PAPER = "https://ia.media-imdb.com/images/paper.jpg"
SCISSORS = "https://ia.media-imdb.com/images/scissors.jpg"


def _record(*extra: tuple[str, str], title: str = "some title") -> OpenGraph:
    return OpenGraph.from_pairs([("title", title), ("url", _URL), *extra])


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_empty_pairs_raise_empty_input(self):
        with pytest.raises(EmptyInputError):
            OpenGraph.from_pairs([])

    def test_missing_title(self):
        with pytest.raises(MissingTitleError):
            OpenGraph.from_pairs([("type", "article"), ("url", _URL)])

    def test_missing_url(self):
        with pytest.raises(MissingURLError):
            OpenGraph.from_pairs([("title", "T"), ("type", "article")])

    @pytest.mark.parametrize("value", ["invalid", "ftp://example.com/file", "/relative/path"])
    def test_url_must_be_absolute_http(self, value):
        with pytest.raises(MissingURLError):
            OpenGraph.from_pairs([("title", "T"), ("url", value)])

    def test_title_checked_before_url(self):
        with pytest.raises(MissingTitleError):
            OpenGraph.from_pairs([("type", "article")])

    def test_direct_construction_is_validated(self):
        with pytest.raises(MissingTitleError):
            OpenGraph(tags=(OpenGraphTag(key="url", value=_URL),))

    def test_valid_record(self):
        record = OpenGraph.from_pairs([("title", "T"), ("url", _URL)])
        assert str(record.url) == _URL

    def test_long_url_is_accepted(self):
        long_url = "https://example.com/" + "a" * 2100
        record = OpenGraph.from_pairs([("title", "T"), ("url", long_url)])
        assert record.url == long_url

    def test_url_is_returned_as_written(self):
        record = OpenGraph.from_pairs([("title", "T"), ("url", "https://EXAMPLE.com")])
        assert record.url == "https://EXAMPLE.com"

    def test_any_valid_url_tag_is_enough(self):
        record = OpenGraph.from_pairs(
            [("title", "T"), ("url", "invalid"), ("url", "http://example.org/a")]
        )
        assert str(record.url) == "http://example.org/a"

    def test_record_is_immutable(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.tags = ()

    def test_error_messages(self):
        assert str(EmptyInputError()) == "No meta tags were provided"
        assert str(MissingTitleError()) == "No title opengraph tag was provided"
        assert str(MissingURLError()) == "No URL opengraph tag was provided"


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestLookups:
    def test_lookup_by_key_and_string_agree(self):
        record = _record(("video:actor", "John"), ("video:actor", "Jane"))
        assert record[OpenGraphKey.VIDEO_ACTOR] == ["John", "Jane"]
        assert record["video:actor"] == ["John", "Jane"]

    def test_get_returns_none_when_absent(self):
        record = _record()
        assert record.get(OpenGraphKey.DESCRIPTION) is None
        assert record[OpenGraphKey.DESCRIPTION] == []

    def test_unrecognised_keys_are_kept(self):
        record = _record(("twitter:card", "summary"))
        assert record.get("twitter:card") == ["summary"]

    def test_lookups_are_not_decoded(self):
        record = _record(title="Rock &amp; Roll")
        assert record.get("title") == ["Rock &amp; Roll"]

    def test_contains(self):
        record = _record(("type", "article"))
        assert record.contains(OpenGraphKey.TYPE, "article")
        assert not record.contains(OpenGraphKey.TYPE, "website")

    def test_pairs_preserve_order_and_duplicates(self):
        record = _record(("image", ROCK), ("image", ROCK))
        assert record.pairs() == [
            ("title", "some title"),
            ("url", _URL),
            ("image", ROCK),
            ("image", ROCK),
        ]


# ---------------------------------------------------------------------------
# Scalar properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_title_decodes_entities(self):
        record = _record(title="The Rock &amp; Roll")
        assert record.title == "The Rock & Roll"

    def test_first_title_wins(self):
        record = _record(("title", "second"), title="first")
        assert record.title == "first"

    def test_type_defaults_to_website(self):
        assert _record().type == "website"

    def test_type(self):
        assert _record(("type", "video.movie")).type == "video.movie"

    def test_empty_type_is_kept(self):
        assert _record(("type", "")).type == ""

    def test_description_decodes_entities(self):
        record = _record(("description", "description&dollar;"))
        assert record.description == "description$"

    def test_description_absent(self):
        assert _record().description is None

    def test_site_name(self):
        assert _record(("site_name", "IMDb")).site_name == "IMDb"
        assert _record().site_name is None


class TestDisplayName:
    def test_title_without_site_name(self):
        assert _record().display_name == "some title"

    def test_site_name_and_title(self):
        record = _record(("site_name", "Jay Wardell"))
        assert record.display_name == "Jay Wardell | some title"

    def test_title_when_site_name_equals_title(self):
        record = _record(("site_name", "some title"))
        assert record.display_name == "some title"

    def test_empty_site_name_still_prefixes(self):
        record = _record(("site_name", ""))
        assert record.display_name == " | some title"


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


class TestImages:
    def test_no_images(self):
        assert _record().images() == []

    @pytest.mark.parametrize("key", ["image", "image:url", "image:secure_url"])
    def test_each_image_key_yields_an_image(self, key):
        images = _record((key, ROCK)).images()
        assert [str(image.url) for image in images] == [ROCK]

    def test_does_not_duplicate_images(self):
        record = _record(
            ("image:url", ROCK),
            ("image:secure_url", ROCK),
            ("image:secure_url", ROCK),
        )
        assert len(record.images()) == 1

    def test_distinguishes_multiple_images(self):
        record = _record(
            ("image", ROCK),
            ("image:url", ROCK),
            ("image:secure_url", PAPER),
            ("image:secure_url", SCISSORS),
        )
        assert [str(image.url) for image in record.images()] == [ROCK, PAPER, SCISSORS]

    def test_key_order_beats_document_order(self):
        record = _record(("image:secure_url", PAPER), ("image", ROCK))
        assert [str(image.url) for image in record.images()] == [ROCK, PAPER]

    def test_unparseable_images_are_dropped(self):
        record = _record(
            ("image", "https://example.com:notaport/a.png"),
            ("image", ""),
            ("image", ROCK),
        )
        assert [image.url for image in record.images()] == [ROCK]

    def test_relative_images_are_kept(self):
        record = _record(("image", "/img/a.png"))
        assert [image.url for image in record.images()] == ["/img/a.png"]

    def test_images_compare_exact_urls(self):
        record = _record(
            ("image", "https://EXAMPLE.com"),
            ("image:url", "https://example.com/"),
            ("image:secure_url", "https://EXAMPLE.com"),
        )
        assert [image.url for image in record.images()] == [
            "https://EXAMPLE.com",
            "https://example.com/",
        ]

    def test_structured_image_properties_are_ignored(self):
        record = _record(("image", ROCK), ("image:width", "400"), ("image:type", "image/jpeg"))
        assert len(record.images()) == 1
