"""
Sample count lookup for video containers.

Asks ffprobe for the per-stream header data of a media file and returns the
number of samples stored for one MP4 track.
"""

import logging
import os
import subprocess
import sys
from typing import Any, Dict, List, Optional

import orjson

from common.exceptions import ContainerError
from config import constants

logger = logging.getLogger(__name__)


def _run_ffprobe(video_path: str) -> Dict[str, Any]:
    cmd = [constants.FFPROBE_PATH, '-v', 'error',
           '-show_entries', 'stream=index,id,codec_type,nb_frames', '-of', 'json', video_path]
    creation_flags = subprocess.CREATE_NO_WINDOW if sys.platform == 'win32' else 0
    try:
        result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=True,
                                timeout=constants.FFPROBE_TIMEOUT_SECONDS, creationflags=creation_flags)
    except FileNotFoundError as e:
        raise ContainerError(f"ffprobe not found at '{constants.FFPROBE_PATH}'") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b'').decode('utf-8', errors='replace').strip()
        raise ContainerError(f"ffprobe could not read '{video_path}': {stderr}") from e
    except subprocess.TimeoutExpired as e:
        raise ContainerError(f"ffprobe timed out reading '{video_path}'") from e

    try:
        return orjson.loads(result.stdout)
    except orjson.JSONDecodeError as e:
        raise ContainerError(f"Unreadable ffprobe output for '{video_path}'") from e


def _parse_track_id(raw_id: Any) -> Optional[int]:
    # ffprobe reports MP4 track ids as hex strings such as "0x1"
    if raw_id is None:
        return None
    try:
        return int(str(raw_id), 0)
    except ValueError:
        return None


def _select_stream(streams: List[Dict[str, Any]], track_index: int) -> Optional[Dict[str, Any]]:
    for stream in streams:
        if _parse_track_id(stream.get('id')) == track_index:
            return stream
    # Containers without track ids: fall back to 1-based stream position
    position = track_index - 1
    if 0 <= position < len(streams) and streams[position].get('id') is None:
        return streams[position]
    return None


def get_track_sample_count(video_path: str, track_index: int = constants.DEFAULT_SAMPLE_TRACK_INDEX) -> int:
    """
    Return the number of samples in track ``track_index`` of a media file.

    Args:
        video_path: Path to the media file
        track_index: 1-based MP4 track id

    Raises:
        FileNotFoundError: If the media file does not exist
        ContainerError: If the container cannot be read or has no such track
    """
    if not os.path.exists(video_path):
        raise FileNotFoundError(video_path)

    data = _run_ffprobe(video_path)
    streams = data.get('streams') or []

    stream = _select_stream(streams, track_index)
    if stream is None:
        raise ContainerError(f"Track {track_index} not found in '{os.path.basename(video_path)}'")

    nb_frames = stream.get('nb_frames')
    try:
        sample_count = int(nb_frames)
    except (TypeError, ValueError) as e:
        raise ContainerError(
            f"Track {track_index} of '{os.path.basename(video_path)}' has no sample count") from e

    logger.debug(f"Track {track_index} of {os.path.basename(video_path)}: {sample_count} samples")
    return sample_count
