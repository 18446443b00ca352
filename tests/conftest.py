import pytest, moderngl
from flowfield.config import AppConfig
from flowfield.uniforms import UniformStore


@pytest.fixture(scope="module")
def ctx():
    errors = []
    # Default backend first, then EGL for machines without a display
    for kwargs in ({}, {"backend": "egl"}):
        try:
            return moderngl.create_standalone_context(**kwargs)
        except Exception as e:
            errors.append(f"{kwargs or 'default'}: {e}")
    pytest.skip(f"Could not create headless GL context ({'; '.join(errors)})")


@pytest.fixture
def cfg():
    return AppConfig()


@pytest.fixture
def store(cfg):
    return UniformStore((800, 600), cfg.palette())
