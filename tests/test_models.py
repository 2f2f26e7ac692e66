import pytest

from conftest import make_card
from interestmeet.models.card import Card, Rarity, with_rarity
from interestmeet.models.collection import (
    CollectionBucket,
    add_to_collections,
    level_for,
    total_collected,
)
from interestmeet.models.failure import ApiResponse, NoCardError, ProfileRequiredError
from interestmeet.models.profile import Profile


class TestCard:
    def test_card_immutable(self) -> None:
        card = make_card("c1")
        with pytest.raises(AttributeError):
            card.rarity = Rarity.RARE  # type: ignore[misc]

    def test_custom_type_allowed(self) -> None:
        card = Card(id="c1", type="riddle", content="What has keys?", theme="Music")
        assert card.type == "riddle"
        assert card.is_person is False

    def test_person_card(self) -> None:
        assert make_card("p1", card_type="person").is_person is True

    def test_with_rarity_returns_copy(self) -> None:
        card = make_card("c1", rarity=Rarity.COMMON)
        legendary = with_rarity(card, Rarity.LEGENDARY)

        assert legendary.rarity is Rarity.LEGENDARY
        assert card.rarity is Rarity.COMMON
        assert legendary.id == card.id
        assert legendary.content == card.content


class TestCollectionBucket:
    @pytest.mark.parametrize(
        ("count", "level"),
        [(0, 1), (1, 1), (4, 1), (5, 2), (9, 2), (10, 3), (27, 6)],
    )
    def test_level_for(self, count: int, level: int) -> None:
        assert level_for(count) == level

    def test_add_card_recomputes_count_and_level(self) -> None:
        bucket = CollectionBucket(theme="Tech")
        for i in range(5):
            bucket = bucket.add_card(make_card(f"c{i}"))

        assert bucket.count == 5
        assert len(bucket.cards) == 5
        assert bucket.level == 2

    def test_add_card_does_not_mutate(self) -> None:
        bucket = CollectionBucket(theme="Tech").add_card(make_card("c1"))
        bucket.add_card(make_card("c2"))
        assert bucket.count == 1


class TestAddToCollections:
    def test_creates_bucket_for_new_theme(self) -> None:
        result = add_to_collections([], make_card("c1", theme="Music"))

        assert len(result) == 1
        assert result[0].theme == "Music"
        assert result[0].count == 1
        assert result[0].level == 1

    def test_appends_to_existing_bucket(self) -> None:
        collections = add_to_collections([], make_card("c1", theme="Tech"))
        collections = add_to_collections(collections, make_card("c2", theme="Music"))
        collections = add_to_collections(collections, make_card("c3", theme="Tech"))

        assert [b.theme for b in collections] == ["Tech", "Music"]
        assert [c.id for c in collections[0].cards] == ["c1", "c3"]
        assert total_collected(collections) == 3

    def test_input_list_untouched(self) -> None:
        original = add_to_collections([], make_card("c1"))
        add_to_collections(original, make_card("c2"))
        assert original[0].count == 1


class TestProfile:
    def test_with_karma(self) -> None:
        profile = Profile(name="n", summary="s", looking_for="l", offering="o", karma=30)
        assert profile.with_karma(10).karma == 40
        assert profile.karma == 30

    def test_match_level(self) -> None:
        profile = Profile(name="n", summary="s", looking_for="l", offering="o", karma=42)
        assert profile.match_level == 5


class TestFailureEnvelope:
    def test_known_error_envelope(self) -> None:
        body = ProfileRequiredError("start_live_chat").to_response().model_dump(mode="json")

        assert set(body) == {"outcome", "failure"}
        assert body["outcome"] == "known_failure"
        assert body["failure"]["kind"] == "missing_required"
        assert body["failure"]["detail"] == "start_live_chat requires a profile"

    def test_empty_deck_error_status(self) -> None:
        error = NoCardError("Tech")
        assert error.status_code == 409
        assert error.to_response().failure.kind.value == "empty_result"

    def test_unknown_failure_envelope(self) -> None:
        body = ApiResponse.unknown_failure(detail="RuntimeError").model_dump(mode="json")

        assert body["outcome"] == "unknown_failure"
        assert body["failure"]["kind"] == "unknown"
        assert body["failure"]["detail"] == "RuntimeError"
