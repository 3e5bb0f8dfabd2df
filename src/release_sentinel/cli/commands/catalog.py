"""Catalog command: list products or show one in detail."""

from argparse import Namespace

from release_sentinel.cli.commands.base import BaseCommandHandler
from release_sentinel.domain.product import ProductProfile


class CatalogHandler(BaseCommandHandler):
    """Handler for the catalog command."""

    async def execute(self, args: Namespace) -> int:
        if args.product:
            profile = self.config_manager.load_product(args.product)
            if args.json:
                self._print_json(self._profile_summary(profile))
            else:
                self._print_details(profile)
            return 0

        profiles, failed = self.config_manager.catalog_loader.load_all()
        if args.json:
            self._print_json(
                {
                    "products": [
                        self._profile_summary(p) for p in profiles.values()
                    ],
                    "invalid": failed,
                }
            )
        else:
            print(f"📋 {len(profiles)} product(s) in catalog:")
            for profile in profiles.values():
                print(
                    f"  {profile.name:<16} {str(profile.version):<10} "
                    f"{len(profile.valid_locales())} locale(s)"
                )
            for name in failed:
                print(f"  ❌ {name}: invalid catalog entry")

        return 1 if failed else 0

    @staticmethod
    def _profile_summary(profile: ProductProfile) -> dict[str, object]:
        return {
            "name": profile.name,
            "version": str(profile.version),
            "discovery": profile.discovery.method.value,
            "locales": profile.valid_locales(),
            "blocker_processes": list(profile.blocker_processes),
        }

    @staticmethod
    def _print_details(profile: ProductProfile) -> None:
        print(f"📦 {profile.name}")
        print(f"   Known-good version: {profile.version}")
        print(f"   Discovery: {profile.discovery.method.value}")
        print(f"   Manifest: {profile.manifest_url_for(profile.version)}")
        print(f"   Locales: {', '.join(profile.valid_locales())}")
        if profile.blocker_processes:
            blockers = ", ".join(profile.blocker_processes)
            print(f"   Blocker processes: {blockers}")
        if profile.publisher:
            print(f"   Publisher: {profile.publisher.subject}")
