from __future__ import annotations

import argparse
import dataclasses
import json

from artist_insights.aggregator import MultiPlatformAggregator
from artist_insights.config import Settings, configure_logging, load_local_env_file
from artist_insights.data_client import SpotifyDataClient
from artist_insights.export import build_export_payload, tracks_to_csv
from artist_insights.sample_data import TIME_WINDOW_DAYS, SampleDataProvider
from artist_insights.sources import create_data_source
from artist_insights.tokens import create_token_store


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Artist insights summary")
    parser.add_argument("--artist", help="Artist to summarize (defaults to FEATURED_ARTIST env or Ella V)")
    parser.add_argument(
        "--token-file",
        help="JSON token store holding <platform>_access_token keys (defaults to TOKEN_STORE_PATH env)",
    )
    parser.add_argument("--source", choices=["live", "mock"], help="Override the DATA_SOURCE env")
    parser.add_argument(
        "--time-window",
        choices=sorted(TIME_WINDOW_DAYS),
        default="90d",
        help="Window used for streaming totals",
    )
    parser.add_argument(
        "--all-platforms",
        action="store_true",
        help="Also fetch every platform that has a stored token",
    )
    parser.add_argument("--export", choices=["json", "csv"], help="Print an export of the fetched tracks")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, base: Settings) -> Settings:
    overrides = {}
    if args.artist:
        overrides["featured_artist"] = args.artist
    if args.token_file:
        overrides["token_store_path"] = args.token_file
    if args.source:
        overrides["data_source"] = args.source
    return dataclasses.replace(base, **overrides)


def print_summary(client: SpotifyDataClient, provider: SampleDataProvider, settings: Settings, window: str) -> None:
    if client.error:
        print(f"Error: {client.error}")
    for artist in client.artists:
        print(f"Artist:     {artist.name} (popularity {artist.popularity}, {artist.followers} followers)")
    print(f"Albums:     {len(client.albums)}")
    print(f"Top tracks: {len(client.tracks)}")
    for track in client.tracks:
        print(f"  - {track.name} (popularity {track.popularity})")
    if client.similar_artists:
        print("Similar:    " + ", ".join(a.name for a in client.similar_artists))

    streams = provider.streaming_numbers(window, "spotify", settings.featured_artist)
    total = sum(item["streaming_metrics"]["total_streams"] for item in streams)
    print(f"Streams ({window}): {total}")


def main(argv: list[str] | None = None) -> None:
    load_local_env_file()
    args = parse_args(argv)
    settings = resolve_settings(args, Settings.from_env())
    configure_logging(settings.log_level)

    provider = SampleDataProvider(seed=settings.sample_seed)
    source = create_data_source(settings, provider)
    token_store = create_token_store(settings.token_store_path)
    client = SpotifyDataClient(settings, source, token_store)

    client.fetch_featured_artist_data()
    print_summary(client, provider, settings, args.time_window)

    if args.all_platforms:
        aggregator = MultiPlatformAggregator(source, token_store)
        aggregator.fetch_all_platform_data(settings.featured_artist)
        analytics = aggregator.cross_platform_analytics()
        print("Platforms:  " + json.dumps(analytics["platform_distribution"]))
        for platform, message in sorted(aggregator.error_report().items()):
            print(f"  ! {platform}: {message}")

    if args.export:
        payload = build_export_payload(
            provider,
            settings.featured_artist,
            [t.id for t in client.tracks],
            [a.id for a in client.artists],
            [a.id for a in client.albums],
            args.export,
        )
        if args.export == "csv":
            print(tracks_to_csv(payload["tracks"]))
        else:
            print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
