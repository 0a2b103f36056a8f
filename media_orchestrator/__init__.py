"""
Media Orchestrator

Orchestration layer over a managed media encoding platform: encoding
transforms, content key policies and tokens, job retry evaluation and
streaming manifest reconciliation.
"""

__version__ = "1.0.0"
