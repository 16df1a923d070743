"""Light group listing."""

from commands.base import HubRequiredCommand
from core.cache import ensure_fresh_cache
from models.items import MenuItem
from models.utils import fuzzy_matches, light_names


class GroupCommand(HubRequiredCommand):
    """Lists the groups defined on the hub."""

    keyword = 'groups'
    description = 'See light groups'

    def is_enabled(self, ctx):
        return super().is_enabled(ctx) and bool(ctx.cache.groups)

    def items(self, ctx, query):
        ensure_fresh_cache(ctx)

        items = []
        for group in ctx.cache.groups.values():
            if fuzzy_matches(group.name, query):
                items.append(MenuItem(
                    title=group.name,
                    subtitle=', '.join(light_names(ctx.cache.lights, group.light_ids)),
                    autocomplete=f'{self.keyword} {group.name}',
                    valid=False,
                ))

        items.sort(key=lambda item: item.title)
        return items
