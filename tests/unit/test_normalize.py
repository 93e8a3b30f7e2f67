from __future__ import annotations

from social_api.services.normalize import normalize, parse_media
from social_api.services.types import TweetData


def make_record(**overrides):
    record = {
        "id_str": "1680997123725340672",
        "text": "Morning walk #sunrise",
        "created_at": "2023-07-17T17:01:54.000Z",
        "user": {
            "id_str": "99",
            "name": "Bee",
            "screen_name": "Bee_Bombshell",
            "profile_image_url_https": "https://pbs.twimg.com/profile_images/1/a.jpg",
            "verified": True,
        },
        "favorite_count": 1234,
        "retweet_count": 5,
        "reply_count": 2,
        "quote_count": 1,
    }
    record.update(overrides)
    return record


class TestNormalize:
    def test_fields(self) -> None:
        tweet = normalize(make_record())

        assert tweet.id == "1680997123725340672"
        assert tweet.url == "https://twitter.com/Bee_Bombshell/status/1680997123725340672"
        assert tweet.text == "Morning walk #sunrise"
        assert tweet.author.username == "Bee_Bombshell"
        assert tweet.author.avatar.endswith("a.jpg")
        assert tweet.author.verified is True
        assert tweet.metrics.likes == 1234
        assert tweet.metrics.quotes == 1
        assert tweet.media == ()

    def test_missing_counts_default_to_zero(self) -> None:
        record = make_record()
        del record["favorite_count"]
        del record["quote_count"]

        tweet = normalize(record)

        assert tweet.metrics.likes == 0
        assert tweet.metrics.quotes == 0

    def test_bad_counts_default_to_zero(self) -> None:
        tweet = normalize(make_record(favorite_count="12", retweet_count=-3, reply_count=float("nan"), quote_count=True))
        assert tweet.metrics.likes == 0
        assert tweet.metrics.retweets == 0
        assert tweet.metrics.replies == 0
        assert tweet.metrics.quotes == 0

    def test_unverified_by_default(self) -> None:
        record = make_record()
        del record["user"]["verified"]
        assert normalize(record).author.verified is False

    def test_missing_user(self) -> None:
        record = make_record()
        del record["user"]
        tweet = normalize(record)
        assert tweet.author.name == ""
        assert tweet.url == "https://twitter.com//status/1680997123725340672"

    def test_raw_keeps_payload(self) -> None:
        record = make_record(lang="en")
        assert normalize(record).raw["lang"] == "en"

    def test_to_dict_from_dict(self) -> None:
        tweet = normalize(make_record(photos=[{"url": "https://pbs.twimg.com/media/p.jpg", "width": 10, "height": 20}]))
        restored = TweetData.from_dict(tweet.to_dict())
        assert restored == tweet

    def test_to_dict_copies_raw(self) -> None:
        tweet = normalize(make_record())
        data = tweet.to_dict()
        data["raw"]["user"]["name"] = "changed"
        assert tweet.raw["user"]["name"] == "Bee"
        assert TweetData.from_dict(data).raw is not data["raw"]


class TestParseMedia:
    def test_photos_then_video(self) -> None:
        record = make_record(
            video={"poster": "https://pbs.twimg.com/poster.jpg", "variants": [{"type": "video/mp4", "src": "v.mp4"}]},
            photos=[
                {"url": "https://pbs.twimg.com/media/1.jpg", "width": 800, "height": 600},
                {"url": "https://pbs.twimg.com/media/2.jpg"},
            ],
        )

        media = parse_media(record)

        assert [item.type for item in media] == ["photo", "photo", "video"]
        assert media[0].url == "https://pbs.twimg.com/media/1.jpg"
        assert media[0].width == 800
        assert media[1].width is None
        assert media[2].thumbnail == "https://pbs.twimg.com/poster.jpg"
        assert media[2].url is None
        assert media[2].variants == ({"type": "video/mp4", "src": "v.mp4"},)

    def test_photo_without_url_dropped(self) -> None:
        record = make_record(photos=[{"width": 100}, {"url": "https://pbs.twimg.com/media/ok.jpg"}])
        media = parse_media(record)
        assert len(media) == 1
        assert media[0].url == "https://pbs.twimg.com/media/ok.jpg"

    def test_video_without_variants(self) -> None:
        media = parse_media(make_record(video={"poster": "https://pbs.twimg.com/poster.jpg"}))
        assert media[0].variants == ()

    def test_no_media(self) -> None:
        assert parse_media(make_record()) == []
