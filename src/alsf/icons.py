"""Icon paths, relative to the workflow directory.

Alfred resolves relative icon paths against the installed workflow's
folder, so the images ship with the workflow bundle rather than with
this package.
"""

ICON_DEFAULT = "icon.png"
ICON_TAB = "icons/tab.png"
ICON_ACTIVE = "icons/tab-active.png"
ICON_URL = "icons/url.png"
ICON_FOLDER = "icons/folder.png"
ICON_BLACKLIST = "icons/blacklist.png"
ICON_WARNING = "icons/warning.png"
ICON_ERROR = "icons/error.png"
