import argparse
import asyncio
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from social_api.renderers.tweet_html import generate_tweet_html
from social_api.renderers.tweet_svg import generate_tweet_svg
from social_api.services.config import TweetServiceConfig
from social_api.services.errors import TweetError
from social_api.services.tweet_service import TweetService
from social_api.services.types import TweetData


def show_tweet(data: TweetData) -> None:
    print("=" * 60)
    print("id:", data.id)
    print("url:", data.url)
    print("text:", data.text)
    print("author:", f"{data.author.name} (@{data.author.username})")
    print("verified:", data.author.verified)
    print("metrics:", f"likes={data.metrics.likes} retweets={data.metrics.retweets} "
          f"replies={data.metrics.replies} quotes={data.metrics.quotes}")
    print("created:", data.created_at)
    print("media items:", len(data.media))
    for index, item in enumerate(data.media, start=1):
        print(f"  {index}. {item.type} {item.image_url or ''}")


async def run(urls: list[str], config: TweetServiceConfig, out_dir: pathlib.Path | None) -> int:
    service = TweetService(config)
    failures = 0
    for url in urls:
        print("\n===", url)
        try:
            data = await service.get_tweet_data(url)
        except TweetError as error:
            print(f"error: {error.code}: {error.message}")
            failures += 1
            continue

        show_tweet(data)
        if out_dir is not None:
            out_dir.mkdir(parents=True, exist_ok=True)
            (out_dir / f"{data.id}.html").write_text(generate_tweet_html(data), encoding="utf-8")
            (out_dir / f"{data.id}.svg").write_text(generate_tweet_svg(data), encoding="utf-8")
            print("rendered to:", out_dir)
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch tweets through the syndication endpoint")
    parser.add_argument("url", nargs="*", default=[
        "https://x.com/Bee_Bombshell/status/1680997123725340672",
    ])
    parser.add_argument("--timeout-ms", type=int, default=15000)
    parser.add_argument("--lang", default="en")
    parser.add_argument("--out", type=pathlib.Path, default=None, help="Write HTML and SVG cards here")
    args = parser.parse_args()

    config = TweetServiceConfig(timeout_ms=args.timeout_ms, language=args.lang)
    failures = asyncio.run(run(args.url, config, args.out))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
