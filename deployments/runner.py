"""
Deploy Task Runner
Runs tagged deploy tasks in order against one network
"""

import os
import importlib
from typing import Iterable, List, Optional
from loguru import logger

# Execution order matters: later tasks may read earlier deployments
DEPLOY_TASKS = [
    'scripts.deploy_nft_marketplace',
    'scripts.deploy_basic_nft',
]

DEFAULT_TAGS = ['all']


def parse_tags(value: Optional[str]) -> List[str]:
    """Parse a comma separated tag list (DEPLOY_TAGS)"""
    if not value:
        return list(DEFAULT_TAGS)
    return [tag.strip() for tag in value.split(',') if tag.strip()]


def select_tasks(tags: Iterable[str], task_names: Iterable[str] = DEPLOY_TASKS) -> list:
    """
    Import deploy task modules whose TAGS intersect the requested tags

    Args:
        tags: Requested tags
        task_names: Module paths of deploy tasks, in execution order

    Returns:
        Matching task modules, in execution order
    """
    wanted = set(tags)
    selected = []

    for task_name in task_names:
        module = importlib.import_module(task_name)
        if wanted & set(getattr(module, 'TAGS', [])):
            selected.append(module)

    return selected


async def run_deploy_tasks(env, tags: Optional[Iterable[str]] = None, task_names: Iterable[str] = DEPLOY_TASKS) -> int:
    """
    Run deploy tasks sequentially

    Args:
        env: DeployEnvironment
        tags: Tags to run (DEPLOY_TAGS env or 'all' if None)
        task_names: Module paths of deploy tasks

    Returns:
        Number of tasks run
    """
    if tags is None:
        tags = parse_tags(os.getenv('DEPLOY_TAGS'))

    tasks = select_tasks(tags, task_names)
    logger.info(f"Running {len(tasks)} deploy task(s) on {env.network.name} for tags {list(tags)}")

    for task in tasks:
        logger.debug(f"Running deploy task {task.__name__}")
        await task.deploy(env)

    return len(tasks)
