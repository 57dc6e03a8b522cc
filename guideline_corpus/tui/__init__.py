from guideline_corpus.tui.renderers import CorpusConsoleUI

__all__ = ["CorpusConsoleUI"]
