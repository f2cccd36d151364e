"""Constants and defaults.

Note: Keep labels and header aliases here instead of spreading them across services.
"""

DEFAULT_PORT = 3000
DEFAULT_TUNNEL_RETRY_SECONDS = 5

# Roster spreadsheet headers, first alias with a value wins.
NAME_HEADERS = ("姓名", "Name", "name")
PHONE_HEADERS = ("手机", "手机号", "手机号码", "Phone", "phone")

EXPORT_SHEET_NAME = "签到名单"
EXPORT_FILENAME = "sign_in_data.xlsx"

STATUS_LABELS = {
    "checked_in": "已签到",
    "pending": "未签到",
}
MATCH_TYPE_LABELS = {
    "same-name": "同名",
    "similar-phone": "号码相似",
}
SOURCE_LABEL_NEW = "现场录入"
SOURCE_LABEL_IMPORTED = "导入"
NEW_FLAG_LABEL = "是"

MSG_INCOMPLETE = "请填写完整信息"
