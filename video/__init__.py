from .sample_counter import get_track_sample_count

__all__ = ['get_track_sample_count']
