# Stand-in solver: starts a background child which inherits its output.
# With potential type "wait" it also never finishes on its own.
import os
import subprocess
import sys
import time

ifile = sys.argv[1]
workdir, name = os.path.split(ifile)
odir = os.path.join(workdir, "output_" + name[len("input_") : -len(".txt")])

child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
with open(os.path.join(odir, "child.pid"), "w") as f:
    f.write(str(child.pid))
print("spawned", flush=True)

with open(ifile) as f:
    lines = f.read().splitlines()
if "wait" in lines:
    time.sleep(60)
print("done", flush=True)
