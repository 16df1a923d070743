"""Login and logout for the cloud scene service."""

import logging

from commands.base import HubRequiredCommand
from core.cloud import get_cloud_token
from core.errors import HueError
from core.prompt import PromptField
from models.items import MenuItem

logger = logging.getLogger(__name__)


class CloudCommand(HubRequiredCommand):
    """Toggles the cloud login used to download scenes."""

    keyword = 'cloud'
    description = 'Login to enable scene downloading'

    def menu_item(self, ctx):
        if ctx.config.api_token:
            subtitle = 'Logout of the cloud service'
        else:
            subtitle = self.description
        return MenuItem(title=self.keyword, subtitle=subtitle,
                        autocomplete=self.keyword, arg=self.arg())

    def items(self, ctx, query):
        return [self.menu_item(ctx)]

    def do(self, ctx, data):
        if ctx.config.api_token:
            return self._logout(ctx)
        return self._login(ctx)

    def _login(self, ctx) -> str:
        values, confirmed = ctx.prompt.prompt_user([
            PromptField('Username'),
            PromptField('Password', hidden=True),
        ])
        if not confirmed:
            logger.info("User didn't click OK")
            return ''

        try:
            token = get_cloud_token(values['Username'], values['Password'])
        except HueError as e:
            ctx.prompt.show_message(f"There was an error logging in:\n\n{e}")
            raise

        ctx.config.api_token = token
        ctx.save_config()
        ctx.prompt.show_message("Login successful!")
        return 'Logged in'

    def _logout(self, ctx) -> str:
        ctx.config.api_token = ''
        ctx.save_config()
        ctx.cache.cloud_scenes = {}
        ctx.save_cache()
        ctx.prompt.show_message("Logged out")
        return 'Logged out'
