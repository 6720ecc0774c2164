"""Generate the example's workflows through the library API (same as `wfgen generate`)."""

import logging
from pathlib import Path

from workflowkit.ci import WorkflowGenerator
from workflowkit.config import load_config

logging.basicConfig(level=logging.INFO, format="%(message)s")

project_root = Path(__file__).parent

generator = WorkflowGenerator(project_root, load_config(project_root))
for name, path in generator.generate().items():
    print(f"{name}: {path.relative_to(project_root)}")
