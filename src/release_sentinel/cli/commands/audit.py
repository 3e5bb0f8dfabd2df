"""Audit command: verify bundled checksums against vendor manifests."""

from argparse import Namespace

from release_sentinel.cli.commands.base import BaseCommandHandler
from release_sentinel.cli.parser import split_csv
from release_sentinel.core.audit import AuditReport


class AuditHandler(BaseCommandHandler):
    """Handler for the audit command."""

    async def execute(self, args: Namespace) -> int:
        names = (
            split_csv(args.products) or self.config_manager.list_products()
        )
        profiles = self._load_profiles(names)
        locales = split_csv(args.locale) or None

        reports = await self.service.audit(profiles, locales)

        if args.json:
            self._print_json([report.to_dict() for report in reports])
        else:
            for report in reports:
                print(self._format_report(report))

        return 0 if all(report.is_clean for report in reports) else 1

    @staticmethod
    def _format_report(report: AuditReport) -> str:
        header = f"{report.product} {report.version}"
        if report.error:
            return f"❌ {header}: {report.error}"

        problems = report.problems()
        if not problems:
            return f"✅ {header}: {len(report.entries)} checksum(s) match"

        lines = [f"⚠️  {header}: {len(problems)} problem(s)"]
        for entry in problems:
            lines.append(
                f"   {entry.arch}/{entry.locale}: {entry.status.value}"
            )
        return "\n".join(lines)
