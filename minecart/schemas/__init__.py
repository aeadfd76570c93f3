from .nugget import BreadcrumbStep, ContentNode, MapEntry, NodeKind, Predicate

__all__ = ["BreadcrumbStep", "ContentNode", "MapEntry", "NodeKind", "Predicate"]
