import sys
import os

# to allow autodoc to discover the documented modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

project = 'ClearBallot'
copyright = '2026, ClearBallot contributors'
author = 'ClearBallot contributors'

extensions = [
    'sphinx.ext.autodoc',
]

source_suffix = {
    '.rst': 'restructuredtext',
}

master_doc = 'index'

exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

html_theme = 'sphinxdoc'
