"""OncoCare backend: AI-mediated guidance, notes, quiz and MindCare chat."""

__version__ = "0.2.0"
