"""Engine — coercion, display, prompt sessions and the Prompter facade."""
