from prometheus_client import Counter

FEATURE_RESOLUTIONS = Counter(
    "feature_resolutions_total",
    "Feature flag resolutions by the layer that decided them",
    ["source"],
)

REQUEST_FLAGS = Counter(
    "feature_request_flags_total",
    "Flag values extracted from inbound HTTP requests",
    ["origin"],
)
