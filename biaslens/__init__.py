"""biaslens - normalise news-article HTML and annotate it for biased framing.

Quick usage::

    from biaslens import parse

    article = parse(html, url="https://www.cbsnews.com/news/some-story/")
    print(article.metadata.title)
    print(article.text)

Bias analysis::

    from biaslens import BiasLens, AnalysisUnavailable

    lens = BiasLens()
    try:
        annotated = lens.analyze_sync(html, "cbs")
    except AnalysisUnavailable:
        ...

Adding a publisher::

    from biaslens import SourceAdapter, register_source

    register_source(SourceAdapter(
        name="apnews",
        metadata_extractor=my_metadata,
        content_extractor=my_content,
    ))
"""

from biaslens.bias import AnalysisUnavailable, BiasClient, pair_annotations
from biaslens.items import (
    NO_CONTENT_MESSAGE,
    AnnotatedArticle,
    Annotation,
    Article,
    BlockKind,
    ContentBlock,
    Metadata,
)
from biaslens.parser import BiasLens
from biaslens.profiles import register_profiles
from biaslens.query import analyze, parse
from biaslens.registry import detect_source, extract, register_source, select
from biaslens.sources import SourceAdapter

__version__ = "0.1.0"
__all__ = [
    "NO_CONTENT_MESSAGE",
    "AnalysisUnavailable",
    "AnnotatedArticle",
    "Annotation",
    "Article",
    "BiasClient",
    "BiasLens",
    "BlockKind",
    "ContentBlock",
    "Metadata",
    "SourceAdapter",
    "analyze",
    "detect_source",
    "extract",
    "pair_annotations",
    "parse",
    "register_profiles",
    "register_source",
    "select",
]
