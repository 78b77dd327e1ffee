"""Language-specific configurations."""

from ..models.card import Language

LANG_CONFIG = {
    Language.CHINESE: {
        "label": "中文",
        "file_not_found": "文件未找到",
        "failed_to_load": "加载失败",
        "collection_empty": "收藏夹是空的",
        "collection_reminder": "已收藏 {count}/{capacity} 张卡片",
        "reply_received": "宇宙的回信",
        "card_received": "宇宙已收到你的卡片",
    },
    Language.ENGLISH: {
        "label": "English",
        "file_not_found": "File not found",
        "failed_to_load": "Failed to load",
        "collection_empty": "Your collection is empty",
        "collection_reminder": "{count}/{capacity} cards saved",
        "reply_received": "A reply from the universe",
        "card_received": "The universe received your card",
    },
}

# Bilingual screens show the Chinese line first, then the English one
LANG_CONFIG[Language.BILINGUAL] = {
    key: f"{LANG_CONFIG[Language.CHINESE][key]}\n{LANG_CONFIG[Language.ENGLISH][key]}"
    for key in LANG_CONFIG[Language.CHINESE]
}
LANG_CONFIG[Language.BILINGUAL]["label"] = "双语"


def localized(key: str, language: Language) -> str:
    """Look up a UI string, falling back to Chinese."""
    table = LANG_CONFIG.get(language, LANG_CONFIG[Language.CHINESE])
    return table.get(key, LANG_CONFIG[Language.CHINESE].get(key, key))
