"""Core epidemic modeling components"""

from .disease_params import (
    DiseaseParameters,
    DiseaseDistributions,
    DEFAULT_PARAMS,
    DISEASE_PRESETS,
    get_preset,
)
from .host import Host, DiseaseState
from .disease_model import DiseaseModel

__all__ = [
    'DiseaseParameters',
    'DiseaseDistributions',
    'DEFAULT_PARAMS',
    'DISEASE_PRESETS',
    'get_preset',
    'Host',
    'DiseaseState',
    'DiseaseModel'
]
