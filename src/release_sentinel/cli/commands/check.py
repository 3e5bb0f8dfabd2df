"""Check command: resolve the newest release of products."""

from argparse import Namespace

from release_sentinel.cli.commands.base import BaseCommandHandler
from release_sentinel.cli.parser import split_csv
from release_sentinel.core.resolver import Resolution, ResolutionStatus

_STATUS_ICONS = {
    ResolutionStatus.UNCHANGED: "✅",
    ResolutionStatus.UPDATED: "🆕",
    ResolutionStatus.FAILED: "❌",
}


class CheckHandler(BaseCommandHandler):
    """Handler for the check command."""

    async def execute(self, args: Namespace) -> int:
        profiles = self._load_profiles(split_csv(args.products))
        requested = split_csv(args.locale) or [
            self.global_config["default_locale"]
        ]

        requests = []
        for profile in profiles:
            locales = (
                profile.valid_locales() if args.all_locales else requested
            )
            requests.extend((profile, locale) for locale in locales)

        results = await self.service.check(requests)

        if args.json:
            self._print_json([result.to_dict() for result in results])
        else:
            for result in results:
                print(self._format_result(result))

        return 0 if all(result.is_success for result in results) else 1

    @staticmethod
    def _format_result(result: Resolution) -> str:
        icon = _STATUS_ICONS[result.status]
        name = f"{result.product} ({result.locale})"
        known = result.known_good.version

        if result.status is ResolutionStatus.UNCHANGED:
            return f"{icon} {name}: up to date at {known}"
        if result.status is ResolutionStatus.UPDATED and result.record:
            lines = [f"{icon} {name}: {known} -> {result.record.version}"]
            for artifact in result.record.artifacts:
                lines.append(f"   {artifact.download_url}")
                lines.append(
                    f"   {artifact.hash_algorithm}: {artifact.checksum}"
                )
            return "\n".join(lines)

        suffix = " (using known-good record)" if result.record else ""
        return f"{icon} {name}: {result.error_reason}{suffix}"
