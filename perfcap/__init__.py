"""perfcap — bake live performances into keyframe animation.

Record the transforms of scene nodes frame by frame, then reduce each
recorded stream to a sparse keyframe track that plays back the same within
a tolerance.

Quick start:
    from perfcap import PerformanceRecorder, SceneGraph, SceneNode

    scene = SceneGraph([SceneNode("hand")])
    rec = PerformanceRecorder(scene, epsilon=0.001)

    rec.start_recording(["hand"])
    for frame in range(120):
        scene.get_node("hand").transform.position = tracker.read()
        rec.capture_frame(frame / 60)
    tracks = rec.stop_recording()

    position, rotation = tracks
    print(position.evaluate(0.5))   # Value between keyframes
"""

__version__ = "0.1.0"

from perfcap.channels import DEFAULT_EPSILON, POSITION_CHANNEL, ROTATION_CHANNEL
from perfcap.recorder import PerformanceRecorder
from perfcap.scene import SceneGraph, SceneNode, Transform
from perfcap.simplify import rdp_indices, simplify_channel
from perfcap.utils.schema import AnimationTrack, Interpolation, Keyframe, Sample

__all__ = [
    "AnimationTrack",
    "DEFAULT_EPSILON",
    "Interpolation",
    "Keyframe",
    "POSITION_CHANNEL",
    "PerformanceRecorder",
    "ROTATION_CHANNEL",
    "Sample",
    "SceneGraph",
    "SceneNode",
    "Transform",
    "rdp_indices",
    "simplify_channel",
    "__version__",
]
