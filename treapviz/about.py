__title__ = "treapviz"
__version__ = "0.1.0"
__summary__ = "Treapviz - build, inspect and lay out randomized treaps step-by-step"
__uri__ = "https://github.com/treapviz/treapviz"
__author__ = "Treapviz Contributors"
__email__ = "maintainers@treapviz.dev"
__license__ = "MIT"
