"""Test configuration and fixtures for formatting tests."""

import pytest


MESSY_TEMPLATE = '''{%set total=0%}
{%for item in items%}{%if item.price>limit%}{{item.name|upper}}{%elif item.free%}{{"free"}}{%else%}{%set total=total+item.price%}{%endif%}{%endfor%}
{{total}}'''

CANONICAL_TEMPLATE = '''{% set total = 0 %}
{% for item in items %}
    {% if item.price > limit %}
        {{ item.name | upper }}
    {% elif item.free %}
        {{ "free" }}
    {% else %}
        {% set total = total + item.price %}
    {% endif %}
{% endfor %}
{{ total }}
'''

MALFORMED_TEMPLATE = '''{% if user %}
    {{ user.name
{% endif %}'''


@pytest.fixture
def messy_template():
    """Valid template with no layout at all."""
    return MESSY_TEMPLATE


@pytest.fixture
def canonical_template():
    """Canonical rendering of ``messy_template``."""
    return CANONICAL_TEMPLATE


@pytest.fixture
def malformed_template():
    """Template with a syntax error."""
    return MALFORMED_TEMPLATE
