"""
Score dispatch.

A record is turned into one of two tagged inputs and each input kind has its
own pure scoring function:

    HeuristicInput(name, tld)    -> scoring.heuristic
    VendorInput(name, tld, metrics) -> scoring.vendor
"""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field

from models import DomainRecord, DomainMetrics, DomainScore
from .heuristic import score_name
from .vendor import score_metrics


class HeuristicInput(BaseModel):
    kind: Literal["heuristic"] = "heuristic"
    name: str
    label: str
    tld: str


class VendorInput(BaseModel):
    kind: Literal["vendor"] = "vendor"
    name: str
    tld: str
    metrics: DomainMetrics


ScoreInput = Annotated[Union[HeuristicInput, VendorInput], Field(discriminator="kind")]


def has_vendor_metrics(metrics: DomainMetrics = None) -> bool:
    """Vendor path needs at least a trust flow reading."""
    return metrics is not None and metrics.trust_flow is not None


def to_score_input(record: DomainRecord) -> ScoreInput:
    if has_vendor_metrics(record.metrics):
        return VendorInput(name=record.name, tld=record.tld, metrics=record.metrics)
    return HeuristicInput(name=record.name, label=record.label, tld=record.tld)


def score_input(inp: ScoreInput) -> DomainScore:
    if isinstance(inp, VendorInput):
        return score_metrics(inp.metrics, inp.tld)
    return score_name(inp.name, inp.label, inp.tld)


def score(record: DomainRecord) -> DomainScore:
    """Deterministic score for a record. Never raises."""
    return score_input(to_score_input(record))


def rescore(record: DomainRecord) -> DomainRecord:
    """Copy of the record with its score replaced."""
    return record.with_score(score(record))
