"""PerformanceRecorder — capture live node transforms and bake them to tracks.

Usage:
    from perfcap import PerformanceRecorder

    rec = PerformanceRecorder(scene)
    rec.start_recording(["left_hand", "right_hand"])

    while performing:
        rec.capture_frame(clock.now())

    tracks = rec.stop_recording()
    for track in tracks:
        print(track.entity_id, track.channel_path, len(track))

Each tracked node yields a "transform.position" track immediately followed
by a "transform.rotation" track. Nodes that were never found in the scene
during the session yield no tracks at all.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from perfcap.channels import CHANNELS, DEFAULT_EPSILON
from perfcap.scene import NodeLookup
from perfcap.simplify import simplify_channel
from perfcap.utils.schema import AnimationTrack, CaptureSettings, Sample, SessionState

logger = logging.getLogger(__name__)


class PerformanceRecorder:
    """Records node transforms per frame and simplifies them on stop.

    Holds exactly one session. Starting a new session silently discards
    whatever the previous one buffered. Not thread-safe; a host that calls
    in from several threads must serialize access to each recorder.

    Args:
        scene: Scene graph to pull transforms from. Only get_node() is used.
        epsilon: Simplification tolerance applied to every channel.
    """

    def __init__(self, scene: NodeLookup, epsilon: float = DEFAULT_EPSILON) -> None:
        self._scene = scene
        self._settings = CaptureSettings(epsilon=epsilon)
        self._session = SessionState()
        self._frame_count = 0

    def start_recording(self, entity_ids: Iterable[str]) -> None:
        """Begin a new session tracking the given node ids, in order.

        Duplicate ids stay in the tracked list but share one sample buffer,
        so a duplicated id is captured once per occurrence every frame and
        baked once per occurrence on stop.
        """
        tracked = list(entity_ids)
        self._session.reset()
        self._session.tracked_ids = tracked
        self._session.samples_by_entity = {entity_id: [] for entity_id in tracked}
        self._session.is_recording = True
        self._frame_count = 0

        logger.debug(
            "Recording started for %d entities (epsilon=%g)", len(tracked), self.epsilon
        )

    def capture_frame(self, time: float) -> None:
        """Snapshot every tracked node's transform at the given time.

        Does nothing when no session is active. Nodes missing from the scene
        are skipped for this frame only.
        """
        if not self._session.is_recording:
            return

        for entity_id in self._session.tracked_ids:
            node = self._scene.get_node(entity_id)
            if node is None:
                logger.debug("Node '%s' not found at t=%s, skipping", entity_id, time)
                continue

            transform = node.transform
            self._session.samples_by_entity[entity_id].append(
                Sample(
                    time=time,
                    position=tuple(float(c) for c in transform.position),
                    rotation=tuple(float(c) for c in transform.rotation),
                )
            )

        self._frame_count += 1

    def stop_recording(self) -> list[AnimationTrack]:
        """End the session and bake the buffered samples.

        Returns:
            Tracks in tracked-id order, position then rotation per id.
            Ids with no samples contribute nothing.
        """
        self._session.is_recording = False
        tracks: list[AnimationTrack] = []

        for entity_id in self._session.tracked_ids:
            samples = self._session.samples_by_entity.get(entity_id)
            if not samples:
                continue

            for channel_path in CHANNELS:
                keyframes = simplify_channel(samples, channel_path, self.epsilon)
                tracks.append(
                    AnimationTrack(
                        entity_id=entity_id,
                        channel_path=channel_path,
                        keyframes=keyframes,
                    )
                )

        if self._session.tracked_ids:
            logger.info(
                "Recording stopped: %d frames, %d tracks", self._frame_count, len(tracks)
            )

        self._session.reset()
        self._frame_count = 0
        return tracks

    @property
    def is_recording(self) -> bool:
        return self._session.is_recording

    @property
    def tracked_ids(self) -> tuple[str, ...]:
        """Ids tracked by the current session, including duplicates."""
        return tuple(self._session.tracked_ids)

    @property
    def epsilon(self) -> float:
        return self._settings.epsilon

    @property
    def num_frames(self) -> int:
        """Number of frames captured in the current session."""
        return self._frame_count

    def sample_count(self, entity_id: str) -> int:
        """Number of samples buffered for an entity, 0 if it is not tracked."""
        return len(self._session.samples_by_entity.get(entity_id, ()))

    def __repr__(self) -> str:
        status = "recording" if self._session.is_recording else "idle"
        return (
            f"PerformanceRecorder(entities={len(self._session.tracked_ids)}, "
            f"frames={self._frame_count}, status={status})"
        )
