# -*- coding: utf-8 -*-
"""
Translation dictionaries for English and Traditional Chinese.

This module contains all translatable strings for the DroidPlan application.
"""

TRANSLATIONS = {
    "en": {
        # Generic
        "error.generic": "SYSTEM ERROR",

        # Task validation
        "validation.empty_fields": "COMMAND ERROR: EMPTY FIELDS DETECTED",
        "validation.invalid_timestamp": "COMMAND ERROR: INVALID TIMESTAMP",
        "validation.inverted_window": "TIME PARADOX: START MUST PRECEDE END",
        "validation.deadline_exceeded": "CRITICAL: EXECUTION OVERRUNS DEADLINE",

        # Tasks
        "task.not_found": "TASK NOT FOUND",
        "task.status.ACTIVE": "STATUS: ACTIVE",
        "task.status.COMPLETE": "STATUS: COMPLETE",
        "task.status.CRITICAL": "STATUS: CRITICAL",

        # Expenses
        "expense.locked": "ACCESS DENIED: EXPENSE IS LOCKED",
        "expense.not_found": "EXPENSE NOT FOUND",
        "expense.category.FOOD": "FOOD",
        "expense.category.ESSENTIAL": "ESSENTIAL",
        "expense.category.ENTERTAINMENT": "FUN",
        "expense.category.SUPPLIES": "SUPPLIES",
        "expense.month_total": "MONTH TOTAL: {total}",

        # AI breakdown
        "breakdown.no_suggestions": "No suggestions",
        "breakdown.unavailable": "AI assistant offline: no API key configured",
        "breakdown.failed": "AI assistant error: no suggestions",
    },
    "zh": {
        # Generic
        "error.generic": "系統錯誤",

        # Task validation
        "validation.empty_fields": "指令錯誤：欄位不可空白",
        "validation.invalid_timestamp": "指令錯誤：時間格式無效",
        "validation.inverted_window": "時間悖論：開始時間必須早於結束時間",
        "validation.deadline_exceeded": "警告：執行時間超過截止期限",

        # Tasks
        "task.not_found": "找不到任務",
        "task.status.ACTIVE": "狀態：進行中",
        "task.status.COMPLETE": "狀態：已完成",
        "task.status.CRITICAL": "狀態：已逾期",

        # Expenses
        "expense.locked": "拒絕存取：此筆支出已鎖定",
        "expense.not_found": "找不到支出",
        "expense.category.FOOD": "飲食",
        "expense.category.ESSENTIAL": "必要",
        "expense.category.ENTERTAINMENT": "娛樂",
        "expense.category.SUPPLIES": "用品",
        "expense.month_total": "本月合計：{total}",

        # AI breakdown
        "breakdown.no_suggestions": "沒有建議",
        "breakdown.unavailable": "AI 助理離線：未設定 API 金鑰",
        "breakdown.failed": "AI 助理錯誤：沒有建議",
    },
}
