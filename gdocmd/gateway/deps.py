from typing import Annotated

from fastapi import Depends

from gdocmd.gateway.config import Settings, get_settings

SettingsDep = Annotated[Settings, Depends(get_settings)]
