"""
Deployments Package
Named contract deployments, deploy task runner and script environment
"""

from .types import DeploymentRecord
from .deployment_manager import DeploymentManager
from .runner import run_deploy_tasks

__all__ = ['DeploymentRecord', 'DeploymentManager', 'run_deploy_tasks']
