from workflowkit.config.parser import PipelineConfig
from workflowkit.pipelines import setup

CONFIG = PipelineConfig()


def project_setup():
    return setup(
        CONFIG.node.default,
        registry_url=CONFIG.node.registry_url,
        cache_suffix=CONFIG.cache.install_suffix,
    )
