"""gkectl - create and delete GKE clusters through the gcloud CLI."""

__version__ = "0.1.0"
