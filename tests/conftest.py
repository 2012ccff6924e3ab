"""Shared fixtures and test doubles."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest
from PIL import Image, ImageDraw

from mediasweep.common.errors import ExtractionError, ProbeError
from mediasweep.video.tools import VideoTools


def make_image(width=320, height=240, color=(40, 120, 200), box=None, box_color=(250, 250, 0), mode='RGB'):
    """Solid image, optionally with a filled rectangle drawn on it."""
    img = Image.new(mode, (width, height), color)
    if box:
        ImageDraw.Draw(img).rectangle(box, fill=box_color)
    return img


class FakeVideo:
    """What FakeVideoTools reports for one file.

    ``frames`` maps a sample position (0.1, 0.5, 0.9) to an image; a single
    image is used for every position. ``duration=None`` makes the probe fail
    and ``fail_at`` lists positions whose extraction fails.
    """

    def __init__(self, duration: Optional[float], frames=None, fail_at=()):
        self.duration = duration
        if frames is None:
            frames = make_image()
        self.frames = frames
        self.fail_at = set(fail_at)

    def frame_at(self, position):
        if isinstance(self.frames, dict):
            return self.frames[position]
        return self.frames


class FakeVideoTools(VideoTools):
    """In-memory VideoTools that writes real PNG frames."""

    def __init__(self, videos: Dict[str, FakeVideo]):
        self.videos = videos
        self.probe_calls: List[str] = []
        self.extract_calls: List[tuple] = []
        self.written: List[Path] = []

    def probe_duration(self, path):
        self.probe_calls.append(Path(path).name)
        video = self.videos.get(Path(path).name)
        if video is None or video.duration is None:
            raise ProbeError(f"cannot probe {path}")
        return video.duration

    def extract_frame(self, path, timestamp, output_path):
        name = Path(path).name
        self.extract_calls.append((name, timestamp))
        video = self.videos[name]
        position = round(timestamp / video.duration, 2)
        if position in video.fail_at:
            raise ExtractionError(f"cannot extract {timestamp}s from {path}")
        video.frame_at(position).save(output_path)
        self.written.append(Path(output_path))


class ScriptedPrompter:
    """Prompter that replays canned answers and records the questions."""

    def __init__(self, texts=(), selections=(), confirmations=()):
        self.texts = list(texts)
        self.selections = list(selections)
        self.confirmations = list(confirmations)
        self.asked: List[tuple] = []

    def text(self, message, validate=None):
        self.asked.append(('text', message))
        return self.texts.pop(0) if self.texts else None

    def select(self, message, choices, default=0):
        self.asked.append(('select', message, list(choices)))
        if not self.selections:
            return None
        answer = self.selections.pop(0)
        if callable(answer):
            return answer(choices)
        return answer

    def confirm(self, message, default=False):
        self.asked.append(('confirm', message))
        return self.confirmations.pop(0) if self.confirmations else None


@pytest.fixture
def video_dir(tmp_path):
    """Directory to put placeholder video files in."""
    directory = tmp_path / "videos"
    directory.mkdir()
    return directory


@pytest.fixture
def temp_dir(tmp_path):
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


def touch_videos(directory: Path, names, content=b"not really a video") -> List[Path]:
    paths = []
    for name in names:
        path = directory / name
        path.write_bytes(content)
        paths.append(path)
    return paths
