"""Library modules for round material generation"""

from .expansion import BlockRenderer, TemplateBlockSet, TemplateExpander
from .extractor import extract_round_words
from .orchestrator import GenerationReport, RoundOrchestrator
from .shuffle import shuffle

__all__ = [
    'BlockRenderer',
    'TemplateBlockSet',
    'TemplateExpander',
    'extract_round_words',
    'GenerationReport',
    'RoundOrchestrator',
    'shuffle',
]
