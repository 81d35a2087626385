"""支持 python -m sngcli 调用"""

from sngcli.cli import main

if __name__ == "__main__":
    main()
