"""
FFmpeg video encoder.

Pipes raw RGB frames to ffmpeg via stdin and, when an audio file is given,
muxes it in. Frames go straight from numpy arrays to the encoder.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Iterator

import numpy as np

logger = logging.getLogger(__name__)

# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def build_ffmpeg_command(
    output_path: Path,
    width: int,
    height: int,
    fps: int,
    quality: str = "high",
    audio_path: Path | None = None,
    duration: float | None = None,
) -> list[str]:
    """Assemble the ffmpeg argument list for a raw rgb24 stdin stream."""
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["high"])

    cmd = [
        "ffmpeg", "-y",
        "-loglevel", "error",
        "-f", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", "pipe:0",
    ]
    if audio_path is not None:
        cmd += ["-i", str(audio_path)]

    cmd += ["-c:v", "libx264", "-preset", preset, "-crf", crf, "-pix_fmt", pix_fmt]

    if audio_path is not None:
        cmd += ["-c:a", "aac", "-b:a", "192k", "-shortest"]
    if duration is not None:
        cmd += ["-t", f"{duration:.3f}"]

    cmd.append(str(output_path))
    return cmd


def encode_video(
    frame_iterator: Iterator[np.ndarray],
    output_path: Path,
    width: int = 1280,
    height: int = 720,
    fps: int = 60,
    quality: str = "high",
    audio_path: Path | None = None,
    duration: float | None = None,
    total_frames: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> Path:
    """
    Encode frames to MP4.

    Args:
        frame_iterator: Yields (H, W, 3) uint8 numpy arrays.
        output_path: Output MP4 path.
        width: Frame width.
        height: Frame height.
        fps: Frames per second.
        quality: "high", "medium", or "fast".
        audio_path: Optional audio file to mux in.
        duration: Optional cap on the output length in seconds.
        total_frames: Total frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.

    Raises:
        RuntimeError: If ffmpeg is missing or exits with an error.
    """
    if shutil.which("ffmpeg") is None:
        raise RuntimeError("ffmpeg not found on PATH")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = build_ffmpeg_command(output_path, width, height, fps, quality, audio_path, duration)
    logger.debug("Running %s", " ".join(cmd))

    proc = subprocess.Popen(
        cmd,
        stdin=subprocess.PIPE,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )

    frame_count = 0
    try:
        for frame in frame_iterator:
            proc.stdin.write(np.ascontiguousarray(frame, dtype=np.uint8).tobytes())
            frame_count += 1

            if progress_callback and total_frames:
                progress_callback(frame_count, total_frames)

    except BrokenPipeError:
        # ffmpeg died early; its stderr explains why
        logger.warning("ffmpeg closed its input after %d frames", frame_count)
    finally:
        if proc.stdin:
            try:
                proc.stdin.close()
            except BrokenPipeError:
                # buffered bytes had nowhere to go
                logger.warning("ffmpeg closed its input before the final flush")

    proc.wait()

    if proc.returncode != 0:
        stderr = proc.stderr.read().decode("utf-8", errors="replace")
        error_lines = [
            line for line in stderr.split("\n")
            if "error" in line.lower() or "invalid" in line.lower()
        ]
        error_msg = "\n".join(error_lines[-5:]) if error_lines else stderr[-500:]
        raise RuntimeError(
            f"ffmpeg exited with code {proc.returncode}: {error_msg}"
        )

    logger.info("Encoded %d frames to %s", frame_count, output_path)
    return output_path
