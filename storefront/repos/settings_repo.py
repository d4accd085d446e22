# storefront/repos/settings_repo.py
from sqlalchemy.orm import Session

from storefront.data.models.app_setting import AppSettingModel


class SettingsRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_value(self, key: str) -> dict | None:
        setting = self.db.get(AppSettingModel, key)
        return setting.value if setting else None

    def set_value(self, key: str, value: dict) -> dict:
        setting = self.db.get(AppSettingModel, key)
        if setting:
            setting.value = value
        else:
            self.db.add(AppSettingModel(key=key, value=value))
        self.db.commit()
        return value
