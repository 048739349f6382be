"""
CLI entry point.

Usage:
    lyriscope play <audio> --lyrics song.lrc [options]
    lyriscope render <audio> --lyrics song.lrc [-o out.mp4] [options]
    lyriscope export --lyrics song.lrc --title T --artist A
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from lyriscope.config import PROFILES, VisualConfig, load_config
from lyriscope.core.track import derive_track
from lyriscope.io.exporter import write_export
from lyriscope.themes import FONTS, THEMES


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def _read_lyrics(path: Path | None) -> str:
    if path is None:
        return ""
    if not path.exists():
        print(f"Error: Lyrics file not found: {path}", file=sys.stderr)
        sys.exit(1)
    return path.read_text(encoding="utf-8", errors="replace")


def _add_visual_args(parser: argparse.ArgumentParser):
    parser.add_argument("--lyrics", type=Path, default=None, help="Lyrics file (.lrc or plain text)")
    parser.add_argument("--title", type=str, default=None, help="Song title")
    parser.add_argument("--artist", type=str, default=None, help="Song artist")
    parser.add_argument("--theme", type=str, default=None, choices=list(THEMES), help="Color theme")
    parser.add_argument("--font", type=str, default=None, choices=list(FONTS), help="Lyric font")
    parser.add_argument("--density", type=int, default=None, help="Particle count (10-400)")
    parser.add_argument("--blur", type=int, default=None, help="Backdrop blur radius 0-40")
    parser.add_argument("--lyric-size", type=int, default=None, help="Lyric font size in px")
    parser.add_argument("--no-glow", action="store_true", help="Disable the glow behind lyric text")
    parser.add_argument("--width", type=int, default=None, help="Canvas width")
    parser.add_argument("--height", type=int, default=None, help="Canvas height")
    parser.add_argument("-f", "--fps", type=int, default=None, help="Frames per second")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI flags override its values)",
    )


def _build_config(args: argparse.Namespace, base: VisualConfig | None = None) -> VisualConfig:
    """Defaults < profile < config file < CLI flags."""
    config = base or VisualConfig()
    if args.config:
        if not args.config.exists():
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        try:
            config = load_config(args.config, config)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    overrides = {
        "title": args.title,
        "artist": args.artist,
        "theme": args.theme,
        "font": args.font,
        "density": args.density,
        "blur": args.blur,
        "lyric_size": args.lyric_size,
        "width": args.width,
        "height": args.height,
        "fps": args.fps,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    if args.no_glow:
        config = replace(config, text_glow=False)
    return config.validate()


def _require_audio(path: Path):
    if not path.exists():
        print(f"Error: Audio file not found: {path}", file=sys.stderr)
        sys.exit(1)


def cmd_play(args: argparse.Namespace):
    from lyriscope.player import LivePlayer

    _require_audio(args.audio)
    config = _build_config(args)
    LivePlayer(args.audio, _read_lyrics(args.lyrics), config).run()


def cmd_render(args: argparse.Namespace):
    from lyriscope.render_video import render_video

    _require_audio(args.audio)
    p_cfg = PROFILES[args.profile]
    base = VisualConfig(width=p_cfg["width"], height=p_cfg["height"], fps=p_cfg["fps"])
    config = _build_config(args, base)
    quality = args.quality or p_cfg["quality"]

    output = args.output or args.audio.with_name(f"{args.audio.stem}_lyrics.mp4")

    print(f"Rendering {args.audio} -> {output}")
    print(f"  {config.width}x{config.height} @ {config.fps}fps, theme: {config.theme}, quality: {quality}")
    t0 = time.time()

    result = render_video(
        audio_path=args.audio,
        lyrics=_read_lyrics(args.lyrics),
        output_path=output,
        config=config,
        quality=quality,
        max_duration=args.max_duration,
        seed=args.seed,
        progress_callback=_progress_bar,
    )

    elapsed = time.time() - t0
    file_size_mb = output.stat().st_size / 1024 / 1024
    print(f"\nDone! {file_size_mb:.1f} MB")
    print(f"  Render+encode took {elapsed:.1f}s ({result['n_frames'] / max(elapsed, 0.01):.1f} fps)")
    print(f"  Output: {output}")


def cmd_export(args: argparse.Namespace):
    lyrics = _read_lyrics(args.lyrics)
    track = derive_track(lyrics)
    path = write_export(args.title or "", args.artist or "", track, args.output_dir)
    print(f"Exported lyrics to {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lyriscope",
        description="Audio-reactive lyric backgrounds",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play audio with a live lyric stage")
    play.add_argument("audio", type=Path, help="Input audio file (wav, mp3, ogg, flac)")
    _add_visual_args(play)
    play.set_defaults(func=cmd_play)

    render = sub.add_parser("render", help="Render a lyric video to MP4")
    render.add_argument("audio", type=Path, help="Input audio file (wav, mp3, ogg, flac)")
    render.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output MP4 path (default: <audio>_lyrics.mp4)",
    )
    render.add_argument(
        "-p", "--profile", type=str, default="low",
        choices=list(PROFILES),
        help="Target profile (low: 720p 30fps, medium: 1080p 60fps, high: 4k 60fps)",
    )
    render.add_argument(
        "-q", "--quality",
        type=str,
        default=None,
        choices=["high", "medium", "fast"],
        help="Encoding quality (defaults to profile quality)",
    )
    render.add_argument("--max-duration", type=float, default=None, help="Limit output to N seconds")
    render.add_argument("--seed", type=int, default=None, help="Particle seed")
    _add_visual_args(render)
    render.set_defaults(func=cmd_render)

    export = sub.add_parser("export", help="Write the plain-text lyric sheet")
    export.add_argument("--lyrics", type=Path, required=True, help="Lyrics file (.lrc or plain text)")
    export.add_argument("--title", type=str, default="", help="Song title")
    export.add_argument("--artist", type=str, default="", help="Song artist")
    export.add_argument("--output-dir", type=Path, default=Path("."), help="Output directory")
    export.set_defaults(func=cmd_export)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
