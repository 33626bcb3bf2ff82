"""
Configuration data models for gherkin-report.

These models define the structure of .gherkin-report.json and
~/.config/gherkin-report/config.json files, validated with Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"


class ReportConfig(BaseModel):
    """
    Settings for one report run.

    Paths are kept as strings so they round-trip through JSON config files
    unchanged; use the `*_path` properties to get Path objects.
    """

    model_config = ConfigDict(extra="ignore")

    report_dir: str = Field(
        default="report",
        min_length=1,
        description="Folder the report is written to (deleted and recreated each run)",
    )
    templates_dir: str | None = Field(
        default=None,
        description="Folder holding the HTML partials and style.css (None = bundled)",
    )
    feature_extension: str = Field(
        default=".feature",
        description="File suffix that marks a feature file",
    )
    recursive: bool = Field(
        default=False,
        description="Look for feature files in subfolders too",
    )
    report_file: str = Field(
        default="index.html",
        min_length=1,
        description="Name of the generated page inside report_dir",
    )
    assets: list[str] = Field(
        default_factory=lambda: ["style.css"],
        description="Static files copied from templates_dir into report_dir",
    )
    title: str = Field(
        default="Gherkins Report",
        description="Title shown at the top of the report",
    )

    @field_validator("feature_extension")
    @classmethod
    def ensure_leading_dot(cls, v: str) -> str:
        """Accept 'feature' as well as '.feature'."""
        if v and not v.startswith("."):
            return f".{v}"
        return v

    @property
    def report_path(self) -> Path:
        return Path(self.report_dir)

    @property
    def templates_path(self) -> Path:
        if self.templates_dir:
            return Path(self.templates_dir)
        return BUNDLED_TEMPLATES_DIR
