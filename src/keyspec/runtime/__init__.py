"""Runtime services shared by the compile-time and runtime paths."""
