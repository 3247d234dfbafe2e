"""
Workflow state machine - candidate -> queued -> owned.
"""

from .machine import AcquisitionWorkflow

__all__ = ["AcquisitionWorkflow"]
