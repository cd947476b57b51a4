"""Terminal navigation: states and the loop that drives them.

Import ``Navigator`` from ``sforg_browser.tui.navigator``; the workflows
import the states from here, so this package stays free of them.
"""
