"""
MC-Ensemble Decomposition Engine

Training, decoding and the estimator facade of the multi-class ensemble.
"""

from .decoders import (
    BaseDecoder,
    PairwiseVoteDecoder,
    SoftCodeDecoder,
    finalize_distribution,
    get_decoder,
)
from .model import SubProblem, TrainedModel
from .trainer import build_problems, default_fallback, train_model
from .predictor import predict_distribution, sub_classifier_probas
from .classifier import MultiClassClassifier

__all__ = [
    # Decoders
    "BaseDecoder",
    "PairwiseVoteDecoder",
    "SoftCodeDecoder",
    "finalize_distribution",
    "get_decoder",
    # Model
    "SubProblem",
    "TrainedModel",
    # Training / prediction
    "build_problems",
    "default_fallback",
    "train_model",
    "predict_distribution",
    "sub_classifier_probas",
    # Estimator
    "MultiClassClassifier",
]
