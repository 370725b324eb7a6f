__title__ = "xpisubmit"
__description__ = "Submit a browser extension package to addons.mozilla.org for signing"
__url__ = "https://github.com/xpisubmit/xpisubmit"
__intro__ = "xpisubmit: upload, validate and sign .xpi packages on addons.mozilla.org"
__version__ = "1.2.0"
__license__ = "GPLv3"
