"""Everything needed around the Egg core to run programs: errors, built-ins, sessions and the shell."""
