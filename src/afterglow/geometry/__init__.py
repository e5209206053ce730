"""Frame geometry: mapping pixels onto strip segments."""

from .segment_map import UNMAPPED, SegmentMap, angle_to_segment, angles_to_segments, build_segment_map

__all__ = ["UNMAPPED", "SegmentMap", "angle_to_segment", "angles_to_segments", "build_segment_map"]
