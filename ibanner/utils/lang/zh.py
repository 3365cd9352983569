"""Simplified Chinese UI strings."""

STRINGS: dict[str, str] = {
    # Background / animation / font style
    "Solid Color": "纯色背景",
    "Image": "图片背景",
    "None": "无动效",
    "Scroll": "滚动",
    "Blink": "闪烁",
    "Gradient": "渐变",
    "Breathing": "呼吸灯",
    "Typewriter": "逐字显示",
    "Random Flash": "随机闪现",
    "Static display without animation": "静态显示，无动画效果",
    "Text scrolls from right to left": "文字从右向左滚动显示",
    "Text blinks like a light sign": "文字闪烁效果，类似灯牌",
    "Rainbow gradient background": "彩虹渐变背景效果",
    "Breathing light, opacity pulses": "呼吸灯效果，透明度变化",
    "Characters appear one by one": "文字逐个字符显示，打字机效果",
    "Text flashes at random positions": "文字在屏幕随机位置闪现，炫酷效果",
    "Normal": "普通字体",
    "Artistic": "艺术字",
    "Neon": "霓虹字",
    # Template categories
    "All": "全部",
    "Support": "应援",
    "Party": "聚会",
    "Transport": "接送",
    "Celebration": "庆祝",
    "Communication": "沟通",
    "Custom": "自定义",
    # Main window
    "Enter banner text...": "输入横幅文字...",
    "Show Banner": "开始展示",
    "Style Settings...": "样式设置...",
    "Templates": "模板",
    "History": "历史记录",
    "Reset All Data...": "重置所有数据...",
    # Style dialog
    "Banner Style": "横幅样式",
    "Text": "文字设置",
    "Font Size:": "字体大小:",
    "Bold": "粗体",
    "Font Style:": "字体样式:",
    "Colors": "颜色",
    "Text Color:": "文字颜色:",
    "Background Color:": "背景颜色:",
    "Background": "背景",
    "Type:": "类型:",
    "Choose Image...": "选择图片...",
    "Remove Image": "移除图片",
    "Opacity:": "透明度:",
    "Animation": "动效",
    "Effect:": "效果:",
    "Speed:": "速度:",
    "Save as Template...": "保存为模板...",
    "Template name:": "模板名称:",
    "Category:": "分类:",
    "Failed to save image.": "保存图片失败。",
    # Templates panel
    "Search templates...": "搜索模板...",
    "Favorites only": "仅显示收藏",
    "Apply": "应用",
    "Favorite": "收藏",
    "Delete": "删除",
    # History panel
    "Search history...": "搜索历史记录...",
    "Show Again": "再次展示",
    "Clear All": "清空全部",
    "Clear all history?": "确定清空所有历史记录吗？",
    "No history yet": "暂无历史记录",
    # Preferences
    "Preferences": "偏好设置",
    "Language:": "语言:",
    # Premium
    "Premium": "高级版",
    "Purchase": "购买",
    "Restore Purchases": "恢复购买",
    "All features are free in this version.": "当前版本所有功能免费使用。",
    "Purchased lifetime unlock": "已购买终身解锁",
    "Not purchased": "未购买",
    "Purchase expired": "购买已过期",
    "Purchase grace period": "购买宽限期",
    "Status unknown": "状态未知",
    "Lifetime Unlock": "终身解锁",
    "One purchase, use forever": "一次购买，终身使用",
    "Unlimited Preview": "无限预览",
    "Advanced Animations": "高级动效",
    "Custom Fonts": "自定义字体",
    "Background Images": "背景图片",
    "Export Features": "导出功能",
    "Priority Support": "优先客服",
    "Product information unavailable": "产品信息不可用",
    "Purchase verification failed": "购买验证失败",
    "Purchase is pending, please check later": "购买请求待处理，请稍后查看",
    "Purchase failed": "购买失败",
    "Restore failed": "恢复购买失败",
    "Purchased": "已购买",
    "Close": "关闭",

    # Main window
    "&File": "文件(&F)",
    "&Edit": "编辑(&E)",
    "&Help": "帮助(&H)",
    "&Export Data...": "导出数据(&E)...",
    "&Reset All Data...": "重置所有数据(&R)...",
    "&Preferences...": "偏好设置(&P)...",
    "&Premium...": "高级版(&P)...",
    "&Quit": "退出(&Q)",
    "Banner Text": "横幅文字",
    "Ready": "就绪",
    "Text color changed": "文字颜色已更改",
    "Template applied": "已应用模板",
    "Export Data": "导出数据",
    "Failed to export data.": "导出数据失败。",
    "Data exported": "数据已导出",
    "All data reset": "所有数据已重置",
    "Delete all history, custom templates, favorites and background images?":
        "删除所有历史记录、自定义模板、收藏和背景图片？",

    # Templates / history
    "Delete template": "删除模板",
    "Unfavorite": "取消收藏",
    "Favorites": "收藏",

    # Preferences
    "Maximum History Entries:": "最大历史记录数：",
    "entries": "条",
    "User Interface": "用户界面",
    "Note: Language changes require restart": "注意：更改语言需要重启",
    "Require purchase for premium features": "高级功能需要购买",
    "Reset to Defaults": "恢复默认设置",
    "Reset all preferences to default values?": "将所有偏好设置恢复为默认值？",
}
