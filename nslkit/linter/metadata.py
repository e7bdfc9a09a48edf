"""Declared-parameter source: the skill's sidecar metadata file.

A template ``skill.nsl`` may sit next to ``skill.meta.yaml`` (or
``skill.meta.yml``) shaped like::

    parameters:
      - name: user_name
      - name: order_id
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import yaml

from nslkit.errors import MetadataError

logger = logging.getLogger(__name__)

DEFAULT_META_SUFFIXES = (".meta.yaml", ".meta.yml")


def sidecar_candidates(
    nsl_path: Union[str, Path],
    file_suffix: str = ".nsl",
    meta_suffixes: Sequence[str] = DEFAULT_META_SUFFIXES,
) -> List[Path]:
    """Possible metadata paths for a template, in lookup order."""
    path = Path(nsl_path)
    base = str(path)
    if file_suffix and base.endswith(file_suffix):
        base = base[: -len(file_suffix)]
    return [Path(base + suffix) for suffix in meta_suffixes]


def find_sidecar(
    nsl_path: Union[str, Path],
    file_suffix: str = ".nsl",
    meta_suffixes: Sequence[str] = DEFAULT_META_SUFFIXES,
) -> Optional[Path]:
    for candidate in sidecar_candidates(nsl_path, file_suffix, meta_suffixes):
        if candidate.is_file():
            return candidate
    return None


def load_declared_parameters(
    nsl_path: Union[str, Path],
    file_suffix: str = ".nsl",
    meta_suffixes: Sequence[str] = DEFAULT_META_SUFFIXES,
) -> Optional[List[str]]:
    """
    Read the parameter names declared for a template.

    Args:
        nsl_path: Path of the ``.nsl`` template
        file_suffix: Template suffix replaced by the metadata suffix
        meta_suffixes: Metadata suffixes tried in order

    Returns:
        Declared names in file order, skipping empty ones, or ``None`` when the
        template has no metadata file at all

    Raises:
        MetadataError: If the metadata file cannot be read, is not valid YAML,
            or does not have the expected shape
    """
    meta_path = find_sidecar(nsl_path, file_suffix, meta_suffixes)
    if meta_path is None:
        logger.debug("No metadata file for %s", nsl_path)
        return None

    try:
        with open(meta_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise MetadataError(
            f"failed to parse {meta_path.name}: {exc}",
            path=str(meta_path),
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataError(
            f"failed to read {meta_path.name}: {exc}",
            path=str(meta_path),
        ) from exc

    return _parse_parameters(data, meta_path)


def _parse_parameters(data: Any, meta_path: Path) -> List[str]:
    if data is None:
        return []
    if not isinstance(data, dict):
        raise MetadataError(
            f"metadata must be a YAML mapping, got {type(data).__name__}",
            path=str(meta_path),
        )

    parameters = data.get("parameters")
    if parameters is None:
        return []
    if not isinstance(parameters, list):
        raise MetadataError(
            "'parameters' must be a list",
            path=str(meta_path),
            hint="write each parameter as '- name: <parameter>'",
        )

    names: List[str] = []
    for index, entry in enumerate(parameters):
        if not isinstance(entry, dict):
            raise MetadataError(
                f"parameter #{index + 1} must be a mapping with a 'name' key",
                path=str(meta_path),
            )
        name = entry.get("name")
        if name is None or name == "":
            continue
        if isinstance(name, (dict, list)):
            raise MetadataError(
                f"parameter #{index + 1} has a non-scalar name",
                path=str(meta_path),
            )
        names.append(str(name))
    return names


__all__ = ["load_declared_parameters", "find_sidecar", "sidecar_candidates"]
