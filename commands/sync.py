"""Manual cache refresh."""

from commands.base import HubRequiredCommand
from core.cache import reload_cache
from core.cloud import get_cloud_scenes
from models.items import MenuItem


class SyncCommand(HubRequiredCommand):
    """Re-fetches lights, scenes and groups regardless of cache age."""

    keyword = 'sync'
    description = 'Refresh light and scene data from the hub'

    def refresh(self, ctx) -> str:
        reload_cache(ctx)
        cache = ctx.cache
        summary = f'{len(cache.lights)} lights, {len(cache.scenes)} scenes, {len(cache.groups)} groups'

        if ctx.config.api_token:
            cache.cloud_scenes = get_cloud_scenes(ctx.config.api_token)
            ctx.save_cache()
            summary += f', {len(cache.cloud_scenes)} cloud scenes'

        return summary

    def items(self, ctx, query):
        return [MenuItem(title='Refreshed!', subtitle=self.refresh(ctx), valid=False)]

    def do(self, ctx, data):
        return f'Refreshed {self.refresh(ctx)}'
