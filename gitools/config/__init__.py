"""Configuration for gitools: constants and the keymap loader."""
