"""Service for rendering changelog reports."""

import json
import re
from dataclasses import asdict

from dep_changelog.changelog.domain.value_objects import (
    ChangeEntry,
    ChangelogReport,
    ModuleChangelog,
    ModuleFailure,
)


class ReportService:
    """Render a ChangelogReport as Markdown or JSON."""

    def render(self, report: ChangelogReport, output_format: str = "markdown") -> str:
        """
        Render a report in the requested format.

        Args:
            report: Report to render
            output_format: "markdown" or "json"

        Returns:
            Rendered report text

        Raises:
            ValueError: If the format is not supported
        """
        match output_format:
            case "markdown":
                return self.render_markdown(report)
            case "json":
                return self.render_json(report)
            case _:
                raise ValueError(
                    f"Invalid output format: {output_format}. Supported values: 'markdown', 'json'"
                )

    def render_markdown(self, report: ChangelogReport) -> str:
        lines = [f"# Changelog {report.start_ref}..{report.end_ref}", "", "## Modules", ""]

        lines.append(f"- {report.root.path} ({report.start_ref}..{report.end_ref})")
        lines.extend(self._entry_lines(report.root))

        for module in report.modules:
            lines.append(f"- {module.path} {module.old_version} -> {module.new_version}")
            match module:
                case ModuleFailure(reason=reason):
                    lines.append(f"  - failed to fetch: {reason.splitlines()[0]}")
                case ModuleChangelog():
                    lines.extend(self._entry_lines(module))

        if report.skipped:
            lines += ["", "## Skipped", ""]
            for skipped in report.skipped:
                lines.append(f"- {skipped.path} {skipped.version}: {skipped.reason}")

        lines += [
            "",
            "## Contributors",
            "",
            "| Author | Commits | +Insertions/-Deletions | Files |",
            "| --- | --- | --- | --- |",
        ]
        for summary in report.contributors:
            lines.append(
                f"| {self._escape_cell(summary.author)} | {summary.commits} "
                f"| +{summary.insertions}/-{summary.deletions} | {summary.files} |"
            )

        return "\n".join(lines) + "\n"

    def render_json(self, report: ChangelogReport) -> str:
        data = asdict(report)
        for module_data, module in zip(data["modules"], report.modules):
            module_data["status"] = "failed" if isinstance(module, ModuleFailure) else "ok"
        return json.dumps(data, indent=2) + "\n"

    def _entry_lines(self, module: ModuleChangelog) -> list[str]:
        if not module.entries:
            return ["  - no changes"]
        return [f"  - {self._format_entry(entry)}" for entry in module.entries]

    @staticmethod
    def _format_entry(entry: ChangeEntry) -> str:
        if entry.pull_request is None:
            return entry.subject
        subject = re.sub(rf"\s*\(#{entry.pull_request}\)", "", entry.subject)
        if entry.pull_request_url:
            return f"{subject} ([#{entry.pull_request}]({entry.pull_request_url}))"
        return f"{subject} (#{entry.pull_request})"

    @staticmethod
    def _escape_cell(text: str) -> str:
        return text.replace("|", "\\|")
