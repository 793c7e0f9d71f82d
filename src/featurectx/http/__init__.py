from featurectx.http.deps import get_feature_ctx
from featurectx.http.middleware import FeatureContextMiddleware
from featurectx.http.request import feature_ctx_from_request, req_with_feature_ctx

__all__ = ["FeatureContextMiddleware", "feature_ctx_from_request", "get_feature_ctx", "req_with_feature_ctx"]
