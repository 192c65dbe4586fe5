# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Task Timer application.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Task Timer",

        # Main window
        "main.title": "Task Timer",
        "main.task_placeholder": "Task name",
        "main.add": "Add",
        "main.start": "Start",
        "main.pause": "Pause",
        "main.reset": "Reset",
        "main.remove": "Remove",
        "main.empty": "No tasks yet",
        "main.summary": "{count} task(s), {running} running",

        # Confirmation dialogs
        "task.reset_title": "Reset Task",
        "task.reset_message": "Are you sure you want to reset \"{name}\"?",
        "task.remove_title": "Remove Task",
        "task.remove_message": "Are you sure you want to remove \"{name}\"?",

        # Errors
        "error": "Error",
        "error.empty_name": "Please enter a task name.",
    },
    "de": {
        # Application
        "app.name": "Aufgaben-Timer",

        # Main window
        "main.title": "Aufgaben-Timer",
        "main.task_placeholder": "Aufgabenname",
        "main.add": "Hinzufügen",
        "main.start": "Start",
        "main.pause": "Pause",
        "main.reset": "Zurücksetzen",
        "main.remove": "Entfernen",
        "main.empty": "Noch keine Aufgaben",
        "main.summary": "{count} Aufgabe(n), {running} laufend",

        # Confirmation dialogs
        "task.reset_title": "Aufgabe zurücksetzen",
        "task.reset_message": "Möchten Sie \"{name}\" wirklich zurücksetzen?",
        "task.remove_title": "Aufgabe entfernen",
        "task.remove_message": "Möchten Sie \"{name}\" wirklich entfernen?",

        # Errors
        "error": "Fehler",
        "error.empty_name": "Bitte geben Sie einen Aufgabennamen ein.",
    },
}
