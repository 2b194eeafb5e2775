import logging
from typing import Any, Dict, List, Optional

from .preprocess import (
    PreprocessingPipeline,
    LowercasePreprocessor,
    StopWordsPreprocessor,
    NonsenseTokenPreprocessor,
    RemoveDiacriticsPreprocessor
)
from .stem_preprocessor import StemPreprocessor
from .tokenizer import RegexMatchTokenizer, Tokenizer, TokenType
from ..config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

# Token types that can become index terms
TERM_TYPES = (TokenType.WORD, TokenType.NUMBER, TokenType.URL, TokenType.DATE)


def create_pipeline(config: Optional[Dict[str, Any]] = None) -> PreprocessingPipeline:
    """
    Create a preprocessing pipeline based on configuration.

    Steps are added in the order given by ``pipeline_order``; a step whose
    switch is off in the configuration is skipped.

    Args:
        config: Configuration dictionary (see config.DEFAULT_CONFIG)

    Returns:
        PreprocessingPipeline object
    """
    config = config or DEFAULT_CONFIG
    preprocessors = []

    preproc_config = config.get("preprocessing", {})
    stemming_config = config.get("stemming", {})

    for step in config.get("pipeline_order", DEFAULT_CONFIG["pipeline_order"]):
        if step == "lowercase" and preproc_config.get("lowercase", True):
            preprocessors.append(LowercasePreprocessor())

        elif step == "remove_diacritics" and preproc_config.get("remove_diacritics", True):
            preprocessors.append(RemoveDiacriticsPreprocessor())

        elif step == "nonsense_tokens" and preproc_config.get("nonsense_tokens", {}).get("remove", True):
            min_length = preproc_config.get("nonsense_tokens", {}).get("min_word_length", 1)
            preprocessors.append(NonsenseTokenPreprocessor(min_word_length=min_length))

        elif step == "stemming" and stemming_config.get("use", True):
            preprocessors.append(StemPreprocessor(language=stemming_config.get("language", "fr")))

        elif step == "stop_words" and preproc_config.get("stop_words", {}).get("use", True):
            language = preproc_config.get("stop_words", {}).get("language", "fr")
            preprocessors.append(StopWordsPreprocessor(language=language))

    pipeline = PreprocessingPipeline(preprocessors)
    logger.debug("Created preprocessing pipeline %s", pipeline.name)
    return pipeline


class TextNormalizer:
    """
    Turns raw text into the ordered list of index terms.

    This is the only seam between the linguistic libraries and the rest of the
    engine: anything with a ``normalize(text) -> list[str]`` method can stand in
    for it.
    """

    def __init__(self, pipeline: PreprocessingPipeline, tokenizer: Tokenizer = None):
        self.pipeline = pipeline
        self.tokenizer = tokenizer or RegexMatchTokenizer()

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "TextNormalizer":
        return cls(create_pipeline(config))

    def normalize(self, text: str) -> List[str]:
        """
        Tokenize, stem and stop-word filter a text.

        Args:
            text: Arbitrary text, may be empty

        Returns:
            Terms in document order, duplicates kept
        """
        if not text:
            return []

        tokens = self.tokenizer.tokenize(text)
        self.pipeline.preprocess(tokens, text)

        # Return only non-empty processed token forms
        return [token.processed_form for token in tokens
                if token.token_type in TERM_TYPES and token.processed_form]

    def __repr__(self):
        return f"TextNormalizer({self.pipeline.name})"
