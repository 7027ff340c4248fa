from .request_models import MAX_LIMIT, OriginInput, QueryInput, TraversalInput

__all__ = ["MAX_LIMIT", "OriginInput", "QueryInput", "TraversalInput"]
