from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from tests._classfile_fixtures import write_class_tree

ClassTreeFactory = Callable[..., Path]

SPRING_LIKE_NAMES = (
    "org.pkg.core.io.Resource",
    "org.pkg.core.io.support.ResourcePatternResolver",
    "org.pkg.core.io.support.PathMatchingResourcePatternResolver",
    "org.pkg.beans.factory.BeanFactory",
    "org.pkg.beans.factory.support.DefaultListableBeanFactory",
    "org.pkg.core.io.DefaultResourceLoader",
    "org.pkg.beans.factory.support.AbstractBeanFactory",
    "org.pkg.core.env.PropertyResolver",
    "org.pkg.core.env.PropertyResolver$Inner",
    "org.pkg.core.package-info",
)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("suffixscan")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def class_tree(tmp_path: Path) -> ClassTreeFactory:
    def _make(*names: str, root: str = "classes") -> Path:
        root_path = tmp_path / root
        root_path.mkdir(parents=True, exist_ok=True)
        write_class_tree(root_path, names or SPRING_LIKE_NAMES)
        return root_path

    return _make
