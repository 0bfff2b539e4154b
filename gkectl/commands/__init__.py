from .create import create_cluster_cmd
from .delete import delete_cluster_cmd

__all__ = ['create_cluster_cmd', 'delete_cluster_cmd']
