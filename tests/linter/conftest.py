"""Test configuration and fixtures for linter tests."""

import pytest


CLEAN_SKILL = '''{% set greeting = "Hello" %}
{% for order in orders %}
    {% if order.total > limit %}
        {{ greeting }} {{ user_name | title }} {{ order.id }}
    {% endif %}
{% endfor %}
'''

CLEAN_META = '''title: Order summary
parameters:
  - name: user_name
  - name: orders
  - name: limit
'''

UNDEFINED_SKILL = '''{{ greeting }}
{% for item in items %}
    {{ item }} {{ missing }}
{% endfor %}
{{ item }}
'''


@pytest.fixture
def clean_skill():
    """Skill using only declared and locally defined names."""
    return CLEAN_SKILL


@pytest.fixture
def clean_meta():
    """Metadata declaring the parameters ``clean_skill`` needs."""
    return CLEAN_META


@pytest.fixture
def undefined_skill():
    """Skill referring to names nobody declares."""
    return UNDEFINED_SKILL


@pytest.fixture
def skill_dir(tmp_path):
    """Write a template and optionally its metadata; returns the template path."""
    def _create(content: str, meta=None, name: str = "skill", meta_suffix: str = ".meta.yaml"):
        nsl_path = tmp_path / f"{name}.nsl"
        nsl_path.parent.mkdir(parents=True, exist_ok=True)
        nsl_path.write_text(content, encoding="utf-8")
        if meta is not None:
            (tmp_path / f"{name}{meta_suffix}").write_text(meta, encoding="utf-8")
        return nsl_path
    return _create
