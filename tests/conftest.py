import pytest

from cosmos import CosmologyPlanck
from cosmos.models.cosmology import CosmologicalModel
from cosmos.utils.config import CosmosConfig, SamplingConfig

COARSE_SAMPLING = SamplingConfig(
    singular_samples=11,
    negative_samples=11,
    present_samples=5,
    linear_samples=21,
    intermediate_samples=5,
    positive_samples=21,
)


@pytest.fixture(scope="session")
def coarse_sampling():
    return COARSE_SAMPLING


@pytest.fixture(scope="session")
def coarse_config():
    return CosmosConfig(sampling=COARSE_SAMPLING)


@pytest.fixture(scope="session")
def planck():
    return CosmologyPlanck()


@pytest.fixture(scope="session")
def open_model():
    return CosmologicalModel(0.69, 0.29, 0.06)


@pytest.fixture(scope="session")
def closed_model(coarse_config):
    return CosmologicalModel(0.7, 0.35, -0.05, config=coarse_config)


@pytest.fixture(scope="session")
def wcdm_model(coarse_config):
    return CosmologicalModel(0.7, 0.3, w_eos=(-0.9, 0.1), config=coarse_config)


@pytest.fixture(scope="session")
def flat_model(coarse_config):
    return CosmologicalModel(0.7, 0.3, config=coarse_config)
