from htmlflow.engine.converter import Converter, convert
from htmlflow.engine.finalizer import finalize, order_nodes
from htmlflow.engine.matcher import MatchResult, SelectorMatcher
from htmlflow.engine.merge import MergeOutcome, StyleMergeResolver
from htmlflow.engine.session import ConversionSession, synthesize_class_name
from htmlflow.engine.usage import collect_used_classes
from htmlflow.engine.walker import TreeWalker

__all__ = [
    "Converter",
    "convert",
    "ConversionSession",
    "synthesize_class_name",
    "collect_used_classes",
    "TreeWalker",
    "SelectorMatcher",
    "MatchResult",
    "StyleMergeResolver",
    "MergeOutcome",
    "finalize",
    "order_nodes",
]
