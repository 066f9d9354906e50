"""Pydantic schemas for request and response payloads."""

from .common import ErrorBody, ErrorEnvelope, SuccessEnvelope
from .feature import FeatureCreate, FeatureResponse, FeatureUpdate, VoteCountDriftResponse
from .vote import VoteCreate, VoteResponse, VoteStatusResponse, VoteWithdraw

__all__ = [
    "ErrorBody",
    "ErrorEnvelope",
    "SuccessEnvelope",
    "FeatureCreate",
    "FeatureResponse",
    "FeatureUpdate",
    "VoteCountDriftResponse",
    "VoteCreate",
    "VoteResponse",
    "VoteStatusResponse",
    "VoteWithdraw",
]
