"""
Report orchestration.

The Reporter runs one report generation from start to finish:

    Idle -> FolderPrepared -> TemplatesLoaded -> GherkinsRead
         -> ViewPrepared -> Written -> Idle

Every step is synchronous and attempted once. Any failure propagates to
the caller and aborts the run; the output folder may then be missing or
incomplete.
"""

import logging
import shutil
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from pathlib import Path

from gherkin_report.core.config.models import ReportConfig
from gherkin_report.core.gherkin.analyzer import Analyzer
from gherkin_report.core.gherkin.models import Gherkin
from gherkin_report.core.gherkin.reader import Reader

from .models import TEMPLATE_NAMES, TEMPLATE_SUFFIX, ReportError, TemplatePartials, TemplatesView
from .renderer import ReportRenderer

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_FOLDER = "./"
DATE_FORMAT = "%Y/%m/%d"
TIME_FORMAT = "%H:%M:%S"


class Reporter:
    """
    Build the HTML report for a folder of feature files.

    Collaborators are injectable so tests can replace the filesystem
    reader, the analyzer, the template strings and the clock.

    Example:
        >>> reporter = Reporter(ReportConfig(report_dir="out"))
        >>> reporter.create_gherkins_report("features/")
        PosixPath('out/index.html')
    """

    def __init__(
        self,
        config: ReportConfig | None = None,
        *,
        reader: Reader | None = None,
        analyzer: Analyzer | None = None,
        templates: TemplatePartials | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config or ReportConfig()
        self.reader = reader or Reader(
            extension=self.config.feature_extension,
            recursive=self.config.recursive,
        )
        self.analyzer = analyzer or Analyzer()
        self.clock = clock or datetime.now

        self._folder_to_read_report: str | Path = DEFAULT_SOURCE_FOLDER
        self._folder_to_write_report = self.config.report_path
        self._folder_to_read_templates = self.config.templates_path
        # Injected partials are copied per run, never filled in place
        self._injected_templates = templates or TemplatePartials()
        self._templates = self._injected_templates.model_copy()
        self._gherkins: list[Gherkin] = []
        self._templates_view = TemplatesView()

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def folder_to_read_report(self) -> str | Path:
        """Folder the feature files are read from in the current/last run."""
        return self._folder_to_read_report

    @property
    def folder_to_write_report(self) -> Path:
        return self._folder_to_write_report

    @property
    def folder_to_read_templates(self) -> Path:
        return self._folder_to_read_templates

    @property
    def gherkins(self) -> list[Gherkin]:
        return self._gherkins

    @property
    def templates(self) -> TemplatePartials:
        return self._templates

    @property
    def templates_view(self) -> TemplatesView:
        return self._templates_view

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def create_gherkins_report(self, source_folder: str | Path = DEFAULT_SOURCE_FOLDER) -> Path:
        """
        Generate the report for every feature file in `source_folder`.

        Args:
            source_folder: Folder holding the feature files (default: "./")

        Returns:
            Path of the written report page

        Raises:
            OSError: If a folder or file cannot be read or written
            ReportError: If the page template is missing, or the report
                folder would replace the working or source folder
        """
        self._folder_to_read_report = source_folder
        logger.info(f"Generating report for {source_folder} into {self._folder_to_write_report}")

        self._templates = self._injected_templates.model_copy()
        self._setup_report_folder()
        self._read_all_templates(self._template_files())
        file_list = self.reader.list_feature_files(source_folder)
        self._read_all_gherkins(file_list)
        self._prepare_reports()
        return self._write_report()

    def _setup_report_folder(self) -> None:
        """Delete the old report folder if present, recreate it and copy assets."""
        report_folder = self._folder_to_write_report
        self._check_report_folder(report_folder)
        if report_folder.exists():
            logger.debug(f"Removing previous report folder {report_folder}")
            shutil.rmtree(report_folder)

        report_folder.mkdir(parents=True, exist_ok=True)

        for asset in self.config.assets:
            shutil.copyfile(self._folder_to_read_templates / asset, report_folder / asset)

    def _check_report_folder(self, report_folder: Path) -> None:
        """
        Refuse a report folder whose deletion would take user files with it.

        Raises:
            ReportError: If the report folder is the working directory, the
                source folder, or a parent of either
        """
        target = report_folder.resolve()
        protected = {
            "working directory": Path.cwd().resolve(),
            "source folder": Path(self._folder_to_read_report).resolve(),
        }
        for label, folder in protected.items():
            if folder == target or folder.is_relative_to(target):
                raise ReportError(
                    f"Refusing to use {report_folder} as report folder: "
                    f"it contains the {label} ({folder})"
                )

    def _template_files(self) -> dict[str, Path]:
        """Template files still to be read; injected partials are skipped."""
        return {
            name: self._folder_to_read_templates / f"{name}{TEMPLATE_SUFFIX}"
            for name in TEMPLATE_NAMES
            if getattr(self._templates, name) is None
        }

    def _read_all_templates(self, template_files: Mapping[str, Path]) -> None:
        """Load each named template file into the partials."""
        for name, path in template_files.items():
            setattr(self._templates, name, self.reader.read_file_text(path))
            logger.debug(f"Loaded template '{name}' from {path}")

    def _read_all_gherkins(self, file_list: Sequence[str | Path]) -> list[Gherkin]:
        """
        Read and analyze the given feature files.

        An empty list performs no reads and leaves an empty result.
        """
        if not file_list:
            self._gherkins = []
            return self._gherkins

        rows_per_file = []
        for path in file_list:
            content = self.reader.read_file_text(path)
            rows_per_file.append(self.reader.split_into_lines(content))

        self._gherkins = self.analyzer.get_gherkins(
            rows_per_file, sources=[str(path) for path in file_list]
        )
        logger.info(f"Analyzed {len(file_list)} feature files")
        return self._gherkins

    def _prepare_reports(self) -> TemplatesView:
        """Build the view model: timestamp, gherkins and meta/footer partials."""
        now = self.clock()
        self._templates_view = TemplatesView(
            date=now.strftime(DATE_FORMAT),
            time=now.strftime(TIME_FORMAT),
            title=self.config.title,
            meta=self._templates.meta or "",
            footer=self._templates.footer or "",
            list=self._gherkins,
        )
        return self._templates_view

    def _write_report(self) -> Path:
        html = ReportRenderer(self._templates).render(self._templates_view)
        target = self._folder_to_write_report / self.config.report_file
        target.write_text(html, encoding="utf-8")
        logger.info(f"Report written to {target}")
        return target
