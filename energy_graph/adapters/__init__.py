from .normalize import SampleArrays, normalize_samples

__all__ = ["SampleArrays", "normalize_samples"]
