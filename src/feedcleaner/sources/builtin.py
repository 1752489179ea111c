"""Built-in source configs (WeChat official accounts mirrored by jintiankansha)."""

from __future__ import annotations

KEEP_JS_CONTENT = {
    "description": "只保留正文内容区域 (#js_content)",
    "selector": "#js_content",
    "action": "keep-only",
}

BUILTIN_SOURCES: list[dict] = [
    {
        "name": "huxiu",
        "displayName": "虎嗅APP",
        "rssUrl": "http://rss.jintiankansha.me/rss/GZ6DGNRZGUYDQMDEGEYDGMLBMU4DCMBQGRRGEMJXGNTDMOBXGI2GGNJSGQ2TEYTBG43A====",
        "cleanRules": [
            KEEP_JS_CONTENT,
            {
                "description": "删除文末声明 (本内容为作者独立观点) 所在段落及之后的内容",
                "selector": "span[leaf]",
                "action": "remove-parent-after",
                "textMatch": {"type": "startsWith", "value": "本内容为作者独立观点"},
            },
        ],
    },
    {
        "name": "ifanr",
        "displayName": "爱范儿",
        "rssUrl": "https://rss.jintiankansha.me/rss/GY2XYZRZGYYGCNZWMFSTMZBQG5SDAMJZGEZTOYTEMFRWCMRUMY4GIYLCMEYWKMRYMU2TO===",
        "cleanRules": [
            KEEP_JS_CONTENT,
            {
                "description": "删除招聘信息 (js_darkmode__* 类名的 section)",
                "selector": "section",
                "action": "remove-after",
                "attrMatch": {"name": "class", "pattern": "^js_darkmode__"},
            },
        ],
    },
    {
        "name": "xinzhiyuan",
        "displayName": "新智元",
        "rssUrl": "https://rss.jintiankansha.me/rss/GEYDONJSPQ3WGYLEGJTGEODCMZRTQZJSMZTDSNRUHEZWKY3CGU3GIYZQGM4DGMBYGVTDOYRVGU======",
        "cleanRules": [
            KEEP_JS_CONTENT,
            {
                "description": "删除参考资料及之后的推广内容",
                "selector": "section",
                "action": "remove-after",
                "textMatch": {"type": "equals", "value": "参考资料"},
            },
        ],
    },
]
