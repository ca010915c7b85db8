"""
summary.py

Responsibility: Render the human-readable success banner with next steps.
"""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from scaffold.outcome import StepOutcome, StepStatus

_SUMMARY_TEMPLATE = """
✅ Done! Project created in: {{ project_name }}

To get started:
  cd {{ project_name }}
{%- if not installed %}
  {{ package_manager }} install
{%- endif %}
  {{ package_manager }} run dev
{%- if warnings %}

Finished with warnings:
{%- for outcome in warnings %}
  - {{ outcome.step }}: {{ outcome.detail }}
{%- endfor %}
{%- endif %}

To push to GitHub:
  git remote add origin <your-repo-url>
  git push -u origin main
"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def render_summary(
    *,
    project_name: str,
    package_manager: str,
    install: StepOutcome,
    post_steps: list[StepOutcome],
) -> str:
    """
    `install` decides whether the install hint is shown; every FAILED outcome
    in `post_steps` is listed as a warning.
    """
    template = _env.from_string(_SUMMARY_TEMPLATE)
    return template.render(
        project_name=project_name,
        package_manager=package_manager,
        installed=install.status is StepStatus.SUCCEEDED,
        warnings=[o for o in post_steps if o.status is StepStatus.FAILED],
    )
