from logdecode.resolution.resolver import CandidateResolver
from logdecode.resolution.selector import derive_selector_from_topic

__all__ = [
    "CandidateResolver",
    "derive_selector_from_topic",
]
