"git-promote: branch promotion workflows for the Development/Nightly/Release/main model."

__version__ = '0.3.0'
